"""Manifest persistence for tracking sync history.

The manifest records which paths existed at both roots at the end of the
last successful sync. Comparing it with a fresh scan tells apart a path
that is new on one side from a path that was deleted on the other.

A copy is kept at each root so that losing one root's copy is repaired
on the next run from the surviving one.
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..exceptions import SsyncManifestError
from ..utils import MANIFEST_PREFIX

logger = logging.getLogger(__name__)


def manifest_file_name(label: str) -> str:
    """Return the manifest file name for a label.

    Args:
        label: Sync label shared by both roots

    Returns:
        File name such as ".ssync-photos"

    Raises:
        ValueError: If the label is empty or contains a path separator
    """
    if not label or not label.strip():
        raise ValueError("Label cannot be empty")
    if "/" in label or "\\" in label:
        raise ValueError(f"Label cannot contain path separators: {label!r}")
    return MANIFEST_PREFIX + label


class ManifestStore:
    """Loads and saves the manifest for one sync label."""

    def __init__(self, label: str):
        """Initialize manifest store.

        Args:
            label: Sync label; the manifest is stored as .ssync-<label>
        """
        self.label = label
        self.file_name = manifest_file_name(label)

    def path_for(self, root: Path) -> Path:
        """Get the manifest path at a root."""
        return Path(root) / self.file_name

    def load(self, root: Path) -> list[str]:
        """Load the manifest stored at a root.

        Lines are stripped, blank lines dropped and the result sorted.
        File names that are not valid UTF-8 are kept as surrogate escapes,
        the same form the scanner returns them in.

        Args:
            root: Sync root

        Returns:
            Sorted list of relative paths

        Raises:
            OSError: If the file is missing or unreadable
        """
        manifest_file = self.path_for(root)
        with open(manifest_file, encoding="utf-8", errors="surrogateescape") as f:
            entries = [line.strip() for line in f]
        return sorted(entry for entry in entries if entry)

    def load_any(self, roots: Sequence[Path]) -> list[str]:
        """Load the first non-empty manifest found at any root.

        Args:
            roots: Roots to try, in order

        Returns:
            Sorted manifest entries, or an empty list on first run
        """
        for root in roots:
            try:
                entries = self.load(root)
            except OSError as e:
                logger.debug(f"No manifest at {self.path_for(root)}: {e}")
                continue
            if entries:
                logger.debug(
                    f"Loaded manifest with {len(entries)} path(s) "
                    f"from {self.path_for(root)}"
                )
                return entries

        logger.debug(f"No manifest found for label {self.label!r}, first run")
        return []

    def save(self, root: Path, entries: Iterable[str]) -> None:
        """Write the manifest at a root, replacing any previous one.

        Args:
            root: Sync root
            entries: Relative paths, written one per line

        Raises:
            SsyncManifestError: If the file cannot be written
        """
        manifest_file = self.path_for(root)
        content = "\n".join(entries) + "\n"

        try:
            with open(
                manifest_file, "w", encoding="utf-8", errors="surrogateescape"
            ) as f:
                f.write(content)
        except OSError as e:
            raise SsyncManifestError(
                f"Failed to write manifest {manifest_file}: {e}"
            ) from e
        logger.debug(f"Saved manifest to {manifest_file}")

    def save_all(self, roots: Sequence[Path], entries: Sequence[str]) -> None:
        """Write the same manifest at every root."""
        for root in roots:
            self.save(root, entries)

    def clear(self, roots: Sequence[Path]) -> int:
        """Remove the manifest from each root.

        Args:
            roots: Sync roots

        Returns:
            Number of manifest files removed
        """
        removed = 0
        for root in roots:
            manifest_file = self.path_for(root)
            if manifest_file.exists():
                manifest_file.unlink()
                logger.debug(f"Cleared manifest at {manifest_file}")
                removed += 1
        return removed
