"""Platform detection over a decompiled APK tree."""

import logging
import os
import re
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Final

from apkstack.models.analyze import Platform
from apkstack.utils.apk import normalize_path

logger = logging.getLogger(__name__)

PHONEGAP_PATH_REGEX = re.compile(r"temp/smali(?:_classes\d+)?/com(?:/adobe)?/phonegap")
FLUTTER_PATH_REGEX = re.compile(r"smali/io/flutter/embedding/engine/FlutterJNI\.smali")

XAMARIN_LIBS: Final[frozenset[str]] = frozenset(
    {"libxamarin-app.so", "libmonodroid.so"}
)
FLUTTER_LIB: Final[str] = "libflutter.so"


def get_assets_dir(decompiled_dir: Path) -> Path:
    """Get the assets directory path (it may not exist)."""
    return decompiled_dir / "assets"


def iter_tree(decompiled_dir: Path) -> Iterator[tuple[str, str]]:
    """Yield (name, normalized absolute path) for every entry under the tree."""
    for dirpath, dirnames, filenames in os.walk(decompiled_dir):
        for name in dirnames + filenames:
            yield name, normalize_path(os.path.join(dirpath, name))


def _has_www(decompiled_dir: Path) -> bool:
    return (get_assets_dir(decompiled_dir) / "www").exists()


def is_phonegap(decompiled_dir: Path) -> bool:
    if not _has_www(decompiled_dir):
        return False

    if (decompiled_dir / "smali" / "com" / "adobe" / "phonegap").is_dir():
        return True

    return any(
        PHONEGAP_PATH_REGEX.search(path) for _, path in iter_tree(decompiled_dir)
    )


def is_cordova(decompiled_dir: Path) -> bool:
    if not _has_www(decompiled_dir):
        return False
    return (get_assets_dir(decompiled_dir) / "www" / "cordova.js").exists()


def is_xamarin(decompiled_dir: Path) -> bool:
    return any(name in XAMARIN_LIBS for name, _ in iter_tree(decompiled_dir))


def is_react_native(decompiled_dir: Path) -> bool:
    return (get_assets_dir(decompiled_dir) / "index.android.bundle").exists()


def is_flutter(decompiled_dir: Path) -> bool:
    return any(
        name == FLUTTER_LIB or FLUTTER_PATH_REGEX.search(path)
        for name, path in iter_tree(decompiled_dir)
    )


def is_kotlin(decompiled_dir: Path) -> bool:
    return (decompiled_dir / "kotlin").exists()


# Evaluated in order, first match wins.
PLATFORM_CHECKS: Final[tuple[tuple[Callable[[Path], bool], Platform], ...]] = (
    (is_phonegap, Platform.PHONEGAP),
    (is_cordova, Platform.CORDOVA),
    (is_xamarin, Platform.XAMARIN),
    (is_react_native, Platform.REACT_NATIVE),
    (is_flutter, Platform.FLUTTER),
    (is_kotlin, Platform.NATIVE_KOTLIN),
)


def classify_platform(decompiled_dir: Path) -> Platform:
    """Detect which framework produced the decompiled app.

    Args:
        decompiled_dir: Root of the decompiled APK.

    Returns:
        The first platform whose check matches, NATIVE_JAVA otherwise.
    """
    for check, platform in PLATFORM_CHECKS:
        if check(decompiled_dir):
            logger.debug("Platform %s detected by %s", platform, check.__name__)
            return platform

    logger.debug("No framework signals found, assuming %s", Platform.NATIVE_JAVA)
    return Platform.NATIVE_JAVA
