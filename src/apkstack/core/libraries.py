"""Library detection: match smali package directories against the catalog."""

import logging
import os
import re
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from apkstack.models.library import Library
from apkstack.utils.apk import normalize_path

logger = logging.getLogger(__name__)

SMALI_DIR_PREFIX = "smali"


def _raise_walk_error(error: OSError) -> None:
    raise error


def get_library_pattern(package_name: str) -> re.Pattern[str]:
    """Build the directory pattern for a package (e.g., smali_classes2/com/foo)."""
    package_as_path = re.escape(package_name.replace(".", "/"))
    return re.compile(rf"smali(_classes\d+)?/{package_as_path}")


def get_untracked_package(relative_parts: Sequence[str]) -> str | None:
    """Derive a package name from a directory path relative to the tree root.

    Everything after the first smali* component is joined with dots; the
    smali component itself (and its _classesN suffix) is dropped.

    Returns:
        The package name, or None if the path is not inside a smali tree.
    """
    for index, part in enumerate(relative_parts):
        if part.startswith(SMALI_DIR_PREFIX):
            package_parts = relative_parts[index + 1 :]
            return ".".join(package_parts) if package_parts else None
    return None


class LibraryMatcher:
    """Match a decompiled APK tree against an ordered library catalog."""

    def __init__(self, catalog: Iterable[Library]):
        """Initialize the matcher.

        Args:
            catalog: Known libraries. Order is the tie-break when several
                entries match the same directory.
        """
        self.catalog = tuple(catalog)
        self._patterns = [
            (get_library_pattern(library.package_name), library)
            for library in self.catalog
        ]

    def find_library(self, dir_path: str) -> Library | None:
        """Return the first catalog library whose pattern occurs in dir_path."""
        for pattern, library in self._patterns:
            if pattern.search(dir_path):
                return library
        return None

    def _scan(
        self, top: Path, root: Path, *, descend: bool = True
    ) -> tuple[dict[int, Library], set[str]]:
        matched: dict[int, Library] = {}
        untracked: set[str] = set()

        for dirpath, dirnames, filenames in os.walk(top, onerror=_raise_walk_error):
            dirnames.sort()
            if not descend:
                dirnames.clear()

            library = self.find_library(normalize_path(dirpath))
            if library is not None:
                matched.setdefault(library.id, library)
                continue

            # Intermediate package directories hold no files
            if not filenames:
                continue

            relative_parts = Path(dirpath).relative_to(root).parts
            package_name = get_untracked_package(relative_parts)
            if package_name:
                untracked.add(package_name)

        return matched, untracked

    def match(
        self, decompiled_dir: Path, workers: int | None = None
    ) -> tuple[list[Library], set[str]]:
        """Walk the tree once and collect matched and untracked packages.

        Args:
            decompiled_dir: Root of the decompiled APK.
            workers: If greater than 1, scan top-level subtrees in a thread pool.

        Returns:
            Tuple of (matched libraries in first-seen order, untracked package names).

        Raises:
            OSError: If a directory in the tree cannot be listed.
        """
        root = Path(decompiled_dir)

        if not workers or workers <= 1:
            matched, untracked = self._scan(root, root)
            return list(matched.values()), untracked

        # Root first, then each child subtree in sorted order: same visit
        # order as the sequential walk.
        matched, untracked = self._scan(root, root, descend=False)
        with os.scandir(root) as entries:
            subtrees = sorted(
                Path(entry.path)
                for entry in entries
                if entry.is_dir(follow_symlinks=False)
            )

        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda top: self._scan(top, root), subtrees))

        for partial_matched, partial_untracked in results:
            for library_id, library in partial_matched.items():
                matched.setdefault(library_id, library)
            untracked |= partial_untracked

        return list(matched.values()), untracked


def merge_dependencies(libraries: Iterable[Library]) -> list[Library]:
    """Drop libraries superseded by a bundled replacement.

    For every library declaring a replacement_package, if that library is
    still present, the library whose package name equals replacement_package
    is removed. Pairs come from the input snapshot, so removals do not
    cascade. The input is not modified.

    Args:
        libraries: Matched libraries.

    Returns:
        New list with superseded libraries removed, order preserved.
    """
    snapshot = list(libraries)
    merge_pairs = [
        (library.replacement_package, library.package_name)
        for library in snapshot
        if library.replacement_package
    ]

    result = list(snapshot)
    for superseded, replacement in merge_pairs:
        has_replacement = any(
            library.package_name.lower() == replacement.lower() for library in result
        )
        if not has_replacement:
            continue

        to_remove = next(
            (library for library in result if library.package_name == superseded),
            None,
        )
        if to_remove is not None:
            logger.debug("Dropping %s, superseded by %s", superseded, replacement)
            result = [library for library in result if library.id != to_remove.id]

    return result


def match_libraries(
    decompiled_dir: Path,
    catalog: Iterable[Library],
    *,
    workers: int | None = None,
) -> tuple[list[Library], set[str]]:
    """Match a decompiled tree against a catalog (see LibraryMatcher.match)."""
    return LibraryMatcher(catalog).match(decompiled_dir, workers=workers)
