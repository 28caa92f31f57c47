"""Pydantic models for APK analysis results."""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from apkstack.models.gradle import GradleInfo
from apkstack.models.library import Library


class Platform(StrEnum):
    """Framework an app was built with."""

    NATIVE_JAVA = "Native Java"
    NATIVE_KOTLIN = "Native Kotlin"
    PHONEGAP = "PhoneGap"
    CORDOVA = "Cordova"
    XAMARIN = "Xamarin"
    REACT_NATIVE = "React Native"
    FLUTTER = "Flutter"

    @property
    def is_native(self) -> bool:
        """Check if the app is plain Android (Java or Kotlin)."""
        return self in (Platform.NATIVE_JAVA, Platform.NATIVE_KOTLIN)


class AnalysisReport(BaseModel):
    """Result of analyzing one decompiled APK."""

    model_config = ConfigDict(frozen=True)

    app_name: str
    """Display name, or the package name when no label could be resolved."""

    package_name: str
    """Package name of the analyzed app."""

    platform: Platform
    """Detected framework."""

    libraries: list[Library]
    """Matched catalog libraries, 'Other' category last."""

    untracked_libraries: set[str]
    """Package names found in smali code that no catalog entry matched."""

    apk_size_in_mb: float
    """APK size in megabytes, rounded to 2 decimals."""

    assets_dir: Path | None = None
    """Path to the assets directory, if the app ships one."""

    permissions: list[str]
    """Permissions declared with <uses-permission>, in manifest order."""

    gradle_info: GradleInfo | None = None
    """Version and SDK metadata from apktool.yml."""
