"""Directory scanning utilities for sync operations."""

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Optional

from ..exceptions import SsyncScanError
from ..utils import MANIFEST_PREFIX, TEMP_SUFFIX

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Scans a directory tree and lists every descendant path.

    Files and directories are both listed, relative to the scanned root,
    using forward slashes, sorted ascending. Manifest files at the top
    level of the root are never listed.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> scanner.scan(Path("/sync/folder"))
        ['docs', 'docs/readme.txt', 'notes.txt']

        >>> # With ignore patterns
        >>> scanner = DirectoryScanner(ignore_patterns=["*.tmp", "cache"])
        >>> paths = scanner.scan(Path("/sync/folder"))
    """

    def __init__(
        self,
        ignore_patterns: Optional[list[str]] = None,
        exclude_dot_files: bool = False,
    ):
        """Initialize directory scanner.

        Args:
            ignore_patterns: Glob patterns matched against the relative path
                and against the entry name (e.g., ["*.log", "build/*"])
            exclude_dot_files: Whether to skip files/folders starting with dot
        """
        self.ignore_patterns = ignore_patterns or []
        self.exclude_dot_files = exclude_dot_files

    def should_ignore(self, relative_path: str, name: str) -> bool:
        """Check if a path should be left out of the listing.

        Args:
            relative_path: Path relative to the scanned root
            name: Final path component

        Returns:
            True if path should be ignored
        """
        # Manifests live at the top level of each root
        if "/" not in relative_path and name.startswith(MANIFEST_PREFIX):
            return True

        # Leftovers of an interrupted copy
        if name.endswith(TEMP_SUFFIX):
            return True

        if self.exclude_dot_files and name.startswith("."):
            return True

        for pattern in self.ignore_patterns:
            if fnmatch(relative_path, pattern) or fnmatch(name, pattern):
                logger.debug(f"Ignoring (pattern {pattern!r}): {relative_path}")
                return True

        return False

    def is_excluded(self, relative_path: str) -> bool:
        """Check a path and each of its ancestors against the ignore rules.

        A path under an ignored directory is excluded too, since scan()
        never descends into that directory.

        Args:
            relative_path: Path relative to a root, with forward slashes

        Returns:
            True if scan() would never list the path
        """
        parts = relative_path.split("/")
        for depth in range(1, len(parts) + 1):
            if self.should_ignore("/".join(parts[:depth]), parts[depth - 1]):
                return True
        return False

    def scan(self, root: Path) -> list[str]:
        """List all paths under root.

        Args:
            root: Directory to scan

        Returns:
            Sorted list of relative paths

        Raises:
            SsyncScanError: If root itself cannot be listed
        """
        root = Path(root)
        try:
            entries = list(root.iterdir())
        except OSError as e:
            raise SsyncScanError(f"Cannot scan '{root}': {e}") from e

        paths: list[str] = []
        self._collect(entries, root, paths)
        paths.sort()
        logger.debug(f"Scanned {root}: {len(paths)} path(s)")
        return paths

    def _collect(self, entries: list[Path], root: Path, paths: list[str]) -> None:
        """Append entries, descending into subdirectories."""
        for item in entries:
            relative_path = item.relative_to(root).as_posix()
            if self.should_ignore(relative_path, item.name):
                continue

            paths.append(relative_path)

            # Symlinked directories are listed but not followed
            if item.is_dir() and not item.is_symlink():
                try:
                    children = list(item.iterdir())
                except OSError as e:
                    # Skip directories we can't read
                    logger.warning(f"Cannot read directory {item}: {e}")
                    continue
                self._collect(children, root, paths)


def list_paths(root: Path) -> list[str]:
    """List every path under root with default scanner settings."""
    return DirectoryScanner().scan(root)
