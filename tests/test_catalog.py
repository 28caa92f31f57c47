"""Tests for catalog loading."""

import json

import pytest

from apkstack.core.catalog import load_catalog, parse_catalog
from apkstack.exceptions import CatalogError
from apkstack.models.library import Library

ROWS = [
    {
        "id": 1,
        "name": "OkHttp",
        "package_name": "com.squareup.okhttp3",
        "category": "Networking",
        "website": "https://square.github.io/okhttp/",
    },
    {
        "id": 2,
        "name": "AndroidX Core",
        "package_name": "androidx.core",
        "category": "Other",
        "website": "https://developer.android.com/jetpack/androidx",
        "replacement_package": "android.support.v4",
    },
]


def test_load_catalog_keeps_file_order(tmp_path):
    catalog_file = tmp_path / "libraries.json"
    catalog_file.write_text(json.dumps(ROWS))

    catalog = load_catalog(catalog_file)

    assert [library.id for library in catalog] == [1, 2]
    assert catalog[1].replacement_package == "android.support.v4"
    assert catalog[1].is_other
    assert catalog[0].replacement_package is None


def test_parse_catalog_accepts_wrapped_list():
    catalog = parse_catalog({"libraries": ROWS[:1]})
    assert catalog == [Library(**ROWS[0])]


def test_missing_file(tmp_path):
    with pytest.raises(CatalogError, match="Failed to read catalog"):
        load_catalog(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    catalog_file = tmp_path / "libraries.json"
    catalog_file.write_text("{not json")
    with pytest.raises(CatalogError, match="not valid JSON"):
        load_catalog(catalog_file)


@pytest.mark.parametrize(
    "data",
    [
        {"items": []},
        "libraries",
        [{"id": 1, "name": "No package"}],
    ],
)
def test_invalid_catalog_data(data):
    with pytest.raises(CatalogError):
        parse_catalog(data)
