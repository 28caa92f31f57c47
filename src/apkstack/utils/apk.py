"""APK file and decompiled tree helpers."""

import os
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from apkstack.exceptions import ApkStackError

BYTES_PER_MB = 1024 * 1024
TWO_PLACES = Decimal("0.01")


def validate_apk_path(
    apk_path: Path,
    *,
    error_cls: type[ApkStackError] = ApkStackError,
) -> None:
    """Validate that an APK file path is valid.

    Args:
        apk_path: Path to the APK file to validate.
        error_cls: Exception class to raise on validation failure.

    Raises:
        ApkStackError (or subclass): If the path is missing or not a file.
    """
    if not apk_path.exists():
        raise error_cls(f"APK not found: {apk_path}")

    if not apk_path.is_file():
        raise error_cls(f"Not a file: {apk_path}")


def validate_decompiled_dir(
    decompiled_dir: Path,
    *,
    error_cls: type[ApkStackError] = ApkStackError,
) -> None:
    """Validate that a decompiled APK directory exists."""
    if not decompiled_dir.exists():
        raise error_cls(f"Decompiled directory not found: {decompiled_dir}")

    if not decompiled_dir.is_dir():
        raise error_cls(f"Not a directory: {decompiled_dir}")


def get_size_in_mb(apk_path: Path) -> float:
    """Get the file size in megabytes, rounded half up to 2 decimals."""
    size = Decimal(apk_path.stat().st_size) / BYTES_PER_MB
    return float(size.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def normalize_path(path: Path | str) -> str:
    """Return an absolute path string with forward slashes."""
    return os.path.abspath(path).replace("\\", "/")
