"""Shared fixtures: minimal apktool output trees and catalog libraries."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from apkstack.models.library import Library

MANIFEST = """<?xml version="1.0" encoding="utf-8" standalone="no"?><manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.app" platformBuildVersionCode="34">
    <uses-permission android:name="android.permission.INTERNET"/>
    <uses-permission android:name="android.permission.ACCESS_NETWORK_STATE"/>
    <application android:allowBackup="true" android:icon="@mipmap/ic_launcher" android:label="@string/app_name" android:theme="@style/AppTheme">
        <activity android:exported="true" android:name="com.example.app.MainActivity"/>
    </application>
</manifest>
"""

STRINGS = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <string name="abc_action_bar_home_description">Navigate home</string>
    <string name="app_name">My App</string>
</resources>
"""

APKTOOL_YML = """!!brut.androlib.meta.MetaInfo
apkFileName: app.apk
compressionType: false
doNotCompress:
- resources.arsc
isFrameworkApk: false
packageInfo:
  forcedPackageId: '127'
  renameManifestPackage: null
sdkInfo:
  minSdkVersion: '21'
  targetSdkVersion: '34'
sharedLibrary: false
sparseResources: false
usesFramework:
  ids:
  - 1
  tag: null
version: 2.9.3
versionInfo:
  versionCode: '42'
  versionName: 1.4.2
"""


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def decompiled_dir(tmp_path: Path) -> Path:
    """A decompiled app with manifest, strings and apktool.yml but no code."""
    root = tmp_path / "app"
    write_file(root / "AndroidManifest.xml", MANIFEST)
    write_file(root / "res" / "values" / "strings.xml", STRINGS)
    write_file(root / "apktool.yml", APKTOOL_YML)
    return root


@pytest.fixture
def apk_file(tmp_path: Path) -> Path:
    """A 1.5 MB stand-in for the original APK."""
    path = tmp_path / "app.apk"
    path.write_bytes(b"PK\x03\x04")
    os.truncate(path, 1024 * 1024 * 3 // 2)
    return path


@pytest.fixture
def make_library() -> Callable[..., Library]:
    def _make(
        id: int,
        package_name: str,
        category: str = "Networking",
        replacement_package: str | None = None,
    ) -> Library:
        return Library(
            id=id,
            package_name=package_name,
            name=package_name.rsplit(".", 1)[-1],
            category=category,
            website=f"https://example.com/{id}",
            replacement_package=replacement_package,
        )

    return _make
