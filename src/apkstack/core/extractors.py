"""Text extraction from the manifest, string resources and apktool.yml."""

import logging
import re
from pathlib import Path
from typing import Final

import yaml
from pydantic import ValidationError

from apkstack.exceptions import MetadataParseError, MissingArtifactError
from apkstack.models.gradle import AndroidSdk, GradleInfo, MetaInfo
from apkstack.utils.android_versions import get_android_version

logger = logging.getLogger(__name__)

MANIFEST_FILE: Final[str] = "AndroidManifest.xml"
STRINGS_FILE: Final[str] = "res/values/strings.xml"
APKTOOL_FILE: Final[str] = "apktool.yml"

STRING_RESOURCE_PREFIX: Final[str] = "@string/"

APP_LABEL_REGEX = re.compile(r'<application.+?label="(.+?)"')
USES_PERMISSION_REGEX = re.compile(r'<uses-permission android:name="(.+?)"/>')
MANIFEST_PACKAGE_REGEX = re.compile(r'<manifest\b[^>]*?\spackage="(.+?)"')
# apktool tags the document with its Java class
YAML_TYPE_TAG_REGEX = re.compile(r"^!!\S+[ \t]*$", re.MULTILINE)


def _read_text(path: Path, stage: str) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as e:
        raise MissingArtifactError(path, stage=stage) from e
    except OSError as e:
        raise MissingArtifactError(path, stage=stage, reason="unreadable") from e


def read_manifest(decompiled_dir: Path, stage: str = "manifest") -> str:
    """Read AndroidManifest.xml as text.

    Raises:
        MissingArtifactError: If the manifest is absent or unreadable.
    """
    return _read_text(decompiled_dir / MANIFEST_FILE, stage)


def read_strings(decompiled_dir: Path) -> str | None:
    """Read res/values/strings.xml as text, or None if the app has none."""
    strings_file = decompiled_dir / STRINGS_FILE
    if not strings_file.is_file():
        return None
    return _read_text(strings_file, "app-name")


def extract_package_name(decompiled_dir: Path) -> str | None:
    """Get the `package` attribute of the <manifest> element."""
    match = MANIFEST_PACKAGE_REGEX.search(read_manifest(decompiled_dir, "package-name"))
    return match.group(1) if match else None


def get_app_name_label(decompiled_dir: Path) -> str | None:
    """Get the raw `label` value of the <application> element."""
    match = APP_LABEL_REGEX.search(read_manifest(decompiled_dir, "app-name"))
    return match.group(1) if match else None


def get_string_value(decompiled_dir: Path, label: str) -> str | None:
    """Resolve an `@string/KEY` reference against strings.xml.

    Returns:
        The first value defined for KEY, or None if not found.
    """
    content = read_strings(decompiled_dir)
    if content is None:
        return None

    key = label.removeprefix(STRING_RESOURCE_PREFIX)
    match = re.search(
        rf'<string name="{re.escape(key)}">(.+?)</string>',
        content,
    )
    return match.group(1) if match else None


def extract_app_name(decompiled_dir: Path) -> str | None:
    """Extract the display name of the app.

    Literal labels are used as-is; `@string/` labels are looked up in
    strings.xml. Apostrophes are stripped from the result.

    Args:
        decompiled_dir: Root of the decompiled APK.

    Returns:
        App name, or None if the label or its string resource is missing.

    Raises:
        MissingArtifactError: If the manifest is absent.
    """
    label = get_app_name_label(decompiled_dir)
    if label is None:
        logger.warning("Could not find application label in %s", MANIFEST_FILE)
        return None

    if label.startswith(STRING_RESOURCE_PREFIX):
        app_name = get_string_value(decompiled_dir, label)
    else:
        app_name = label

    if app_name is None:
        logger.warning("Could not resolve app name for label %s", label)
        return None

    return app_name.replace("'", "")


def extract_permissions(decompiled_dir: Path) -> list[str]:
    """Extract <uses-permission> names in manifest order, duplicates kept.

    Raises:
        MissingArtifactError: If the manifest is absent.
    """
    manifest = read_manifest(decompiled_dir, "permissions")
    return USES_PERMISSION_REGEX.findall(manifest)


def load_meta_info(decompiled_dir: Path) -> MetaInfo:
    """Parse apktool.yml into MetaInfo.

    Raises:
        MissingArtifactError: If apktool.yml is absent.
        MetadataParseError: If the document is not valid YAML or not a mapping.
    """
    yaml_file = decompiled_dir / APKTOOL_FILE
    raw = YAML_TYPE_TAG_REGEX.sub("", _read_text(yaml_file, "gradle-info"))

    try:
        # BaseLoader keeps every scalar as text, so 1.10 is not read as a float
        data = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise MetadataParseError(
            f"Invalid YAML in {yaml_file}: {e}", path=yaml_file, stage="gradle-info"
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MetadataParseError(
            f"Expected a mapping in {yaml_file}, got {type(data).__name__}",
            path=yaml_file,
            stage="gradle-info",
        )

    try:
        return MetaInfo.model_validate(data)
    except ValidationError as e:
        raise MetadataParseError(
            f"Unexpected build metadata in {yaml_file}: {e}",
            path=yaml_file,
            stage="gradle-info",
        ) from e


def _to_android_sdk(level: int | None) -> AndroidSdk | None:
    if level is None:
        return None
    return AndroidSdk(level=level, version_name=get_android_version(level))


def extract_gradle_info(decompiled_dir: Path) -> GradleInfo:
    """Build GradleInfo from apktool.yml; absent fields stay None."""
    meta_info = load_meta_info(decompiled_dir)
    sdk_info = meta_info.sdk_info
    version_info = meta_info.version_info

    return GradleInfo(
        version_code=version_info.version_code if version_info else None,
        version_name=version_info.version_name if version_info else None,
        min_sdk=_to_android_sdk(sdk_info.min_sdk_version if sdk_info else None),
        target_sdk=_to_android_sdk(sdk_info.target_sdk_version if sdk_info else None),
    )
