"""Tests for the apkstack command line."""

import json

import pytest
from conftest import write_file
from typer.testing import CliRunner

from apkstack import __version__
from apkstack.cli.main import app
from apkstack.utils import config

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "no-config.json")
    monkeypatch.delenv(config.CATALOG_ENV_VAR, raising=False)
    config.reload_config()
    yield
    config.reload_config()


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "libraries.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 1,
                    "name": "OkHttp",
                    "package_name": "com.squareup.okhttp3",
                    "category": "Networking",
                    "website": "https://square.github.io/okhttp/",
                }
            ]
        )
    )
    return path


@pytest.fixture
def native_app(decompiled_dir):
    write_file(decompiled_dir / "smali/com/squareup/okhttp3/OkHttpClient.smali")
    write_file(decompiled_dir / "smali/com/unknownlib/core/Core.smali")
    return decompiled_dir


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"apkstack {__version__}" in result.stdout


def test_report_json(native_app, apk_file, catalog_file):
    result = runner.invoke(
        app,
        [
            "analyze",
            "report",
            str(native_app),
            "--apk",
            str(apk_file),
            "--catalog",
            str(catalog_file),
            "--json",
        ],
    )

    assert result.exit_code == 0, result.output
    report = json.loads(result.stdout)
    assert report["package_name"] == "com.example.app"
    assert report["app_name"] == "My App"
    assert report["platform"] == "Native Java"
    assert [library["name"] for library in report["libraries"]] == ["OkHttp"]
    assert report["untracked_libraries"] == ["com.unknownlib.core"]
    assert report["gradle_info"]["target_sdk"] == {
        "level": 34,
        "version_name": "Android 14",
    }


def test_report_table(native_app, apk_file, catalog_file):
    result = runner.invoke(
        app,
        [
            "analyze",
            "report",
            str(native_app),
            "--apk",
            str(apk_file),
            "--catalog",
            str(catalog_file),
            "--workers",
            "2",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "My App" in result.stdout
    assert "OkHttp" in result.stdout
    assert "com.unknownlib.core" in result.stdout


def test_catalog_from_env(native_app, apk_file, catalog_file, monkeypatch):
    monkeypatch.setenv(config.CATALOG_ENV_VAR, str(catalog_file))

    result = runner.invoke(
        app, ["analyze", "report", str(native_app), "--apk", str(apk_file), "--json"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["libraries"][0]["id"] == 1


def test_report_without_catalog_fails(native_app, apk_file):
    result = runner.invoke(
        app, ["analyze", "report", str(native_app), "--apk", str(apk_file)]
    )
    assert result.exit_code == 1


def test_report_with_missing_manifest_fails(native_app, apk_file, catalog_file):
    (native_app / "AndroidManifest.xml").unlink()

    result = runner.invoke(
        app,
        [
            "analyze",
            "report",
            str(native_app),
            "--apk",
            str(apk_file),
            "--catalog",
            str(catalog_file),
            "--package",
            "com.example.app",
        ],
    )

    assert result.exit_code == 1


def test_platform_json(decompiled_dir):
    write_file(decompiled_dir / "assets" / "index.android.bundle")

    result = runner.invoke(app, ["analyze", "platform", str(decompiled_dir), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"platform": "React Native", "native": False}
