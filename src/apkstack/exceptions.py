"""Typed exception hierarchy for apkstack."""

from pathlib import Path


class ApkStackError(Exception):
    """Base exception for all apkstack errors."""

    pass


class AnalysisError(ApkStackError):
    """Raised when an analysis run cannot complete."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        stage: str | None = None,
    ):
        self.path = path
        self.stage = stage
        if stage:
            message = f"[{stage}] {message}"
        super().__init__(message)


class MissingArtifactError(AnalysisError):
    """Raised when a required file of the decompiled tree is absent or unreadable."""

    def __init__(
        self,
        path: Path,
        stage: str | None = None,
        reason: str = "not found",
    ):
        self.reason = reason
        super().__init__(f"Required file {reason}: {path}", path=path, stage=stage)


class MetadataParseError(AnalysisError):
    """Raised when apktool.yml cannot be parsed."""

    pass


class CatalogError(ApkStackError):
    """Raised when the library catalog cannot be loaded."""

    pass
