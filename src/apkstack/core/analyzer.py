"""APK analysis: build a stack report from a decompiled APK tree."""

import logging
from collections.abc import Iterable
from pathlib import Path

from apkstack.core.extractors import (
    extract_app_name,
    extract_gradle_info,
    extract_permissions,
)
from apkstack.core.libraries import LibraryMatcher, merge_dependencies
from apkstack.core.platform import classify_platform, get_assets_dir
from apkstack.exceptions import AnalysisError
from apkstack.models.analyze import AnalysisReport, Platform
from apkstack.models.library import Library
from apkstack.utils.apk import (
    get_size_in_mb,
    validate_apk_path,
    validate_decompiled_dir,
)

logger = logging.getLogger(__name__)


class ApkAnalyzer:
    """Analyze decompiled APKs against a library catalog."""

    def __init__(self, catalog: Iterable[Library], workers: int | None = None):
        """Initialize the analyzer.

        Args:
            catalog: Known libraries, in tie-break order. Shared read-only
                between analyses.
            workers: Thread count for library scanning (None scans sequentially).
        """
        self.matcher = LibraryMatcher(catalog)
        self.workers = workers

    @property
    def catalog(self) -> tuple[Library, ...]:
        return self.matcher.catalog

    def get_libraries(
        self, platform: Platform, decompiled_dir: Path
    ) -> tuple[list[Library], set[str]]:
        """Get (libraries, untracked packages) for the app.

        Only native apps are scanned; other platforms yield empty results.

        Raises:
            AnalysisError: If the tree cannot be walked.
        """
        if not platform.is_native:
            logger.debug("Library matching not supported for %s", platform)
            return [], set()

        try:
            libraries, untracked = self.matcher.match(
                decompiled_dir, workers=self.workers
            )
        except OSError as e:
            raise AnalysisError(
                f"Failed to scan {decompiled_dir}: {e}",
                path=decompiled_dir,
                stage="libraries",
            ) from e

        return merge_dependencies(libraries), untracked

    def analyze(
        self,
        package_name: str,
        apk_path: Path,
        decompiled_dir: Path,
    ) -> AnalysisReport:
        """Run the full analysis.

        Args:
            package_name: Package name of the app (fallback app name).
            apk_path: Original APK file, used for its size.
            decompiled_dir: apktool output directory for the APK.

        Returns:
            AnalysisReport for the app.

        Raises:
            AnalysisError: If inputs are missing or a required file cannot be read.
        """
        validate_decompiled_dir(decompiled_dir, error_cls=AnalysisError)
        validate_apk_path(apk_path, error_cls=AnalysisError)

        platform = classify_platform(decompiled_dir)
        libraries, untracked = self.get_libraries(platform, decompiled_dir)
        app_name = extract_app_name(decompiled_dir) or package_name

        assets_dir = get_assets_dir(decompiled_dir)

        report = AnalysisReport(
            app_name=app_name,
            package_name=package_name,
            platform=platform,
            libraries=sorted(libraries, key=lambda library: library.is_other),
            untracked_libraries=untracked,
            apk_size_in_mb=get_size_in_mb(apk_path),
            assets_dir=assets_dir if assets_dir.exists() else None,
            permissions=extract_permissions(decompiled_dir),
            gradle_info=extract_gradle_info(decompiled_dir),
        )
        logger.debug(
            "Analyzed %s: %s, %d libraries, %d untracked",
            package_name,
            platform,
            len(report.libraries),
            len(report.untracked_libraries),
        )
        return report


def analyze(
    package_name: str,
    apk_path: Path,
    decompiled_dir: Path,
    catalog: Iterable[Library],
) -> AnalysisReport:
    """Analyze a decompiled APK with a one-off ApkAnalyzer."""
    return ApkAnalyzer(catalog).analyze(package_name, apk_path, decompiled_dir)
