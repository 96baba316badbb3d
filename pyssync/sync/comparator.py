"""Modification-time comparison for files present at both roots."""

import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..utils import format_mtime, resolve_relative
from .modes import ForceDirection

logger = logging.getLogger(__name__)


@dataclass
class FreshnessResult:
    """Outcome of comparing the two copies of one path."""

    source: Optional[Path]
    """Root holding the copy to propagate, None if no decision"""

    destination: Optional[Path]
    """Root to receive the copy, None if no decision"""

    comparable: bool
    """False when either side is missing or is a directory"""

    @property
    def decided(self) -> bool:
        """Whether a copy direction was chosen."""
        return self.source is not None


class FreshnessResolver:
    """Decides which root holds the more recently modified copy of a file."""

    def __init__(
        self,
        force: ForceDirection = ForceDirection.NONE,
        roots: Optional[tuple[Path, Path]] = None,
    ):
        """Initialize resolver.

        Args:
            force: Root that always wins when the copies differ
            roots: The pair's (root1, root2). When given, force refers to
                these roots whatever order resolve() receives them in;
                otherwise it refers to resolve()'s argument positions.
        """
        self.force = force
        self.roots = roots

    def _forced_root(self, root1: Path, root2: Path) -> Optional[Path]:
        """Return the root the override designates, if any."""
        if self.force == ForceDirection.NONE:
            return None
        index = 0 if self.force == ForceDirection.ROOT1 else 1
        if self.roots is None:
            return (root1, root2)[index]
        return self.roots[index]

    def resolve(self, rel_path: str, root1: Path, root2: Path) -> FreshnessResult:
        """Compare rel_path under root1 and root2.

        Timestamps are compared at one second resolution. Directories are
        never compared; only the files inside them are.

        Args:
            rel_path: Path relative to both roots
            root1: First root
            root2: Second root

        Returns:
            FreshnessResult naming source and destination roots, or none
        """
        try:
            st1 = resolve_relative(root1, rel_path).stat()
            st2 = resolve_relative(root2, rel_path).stat()
        except OSError:
            return FreshnessResult(None, None, comparable=False)

        if stat.S_ISDIR(st1.st_mode) or stat.S_ISDIR(st2.st_mode):
            return FreshnessResult(None, None, comparable=False)

        mtime1 = int(st1.st_mtime)
        mtime2 = int(st2.st_mtime)

        if mtime1 == mtime2:
            return FreshnessResult(None, None, comparable=True)

        forced = self._forced_root(root1, root2)
        if forced == root1:
            return FreshnessResult(root1, root2, comparable=True)
        if forced == root2:
            return FreshnessResult(root2, root1, comparable=True)

        if mtime1 > mtime2:
            source, destination = root1, root2
        else:
            source, destination = root2, root1

        logger.debug(
            f"{rel_path}: {format_mtime(mtime1)} vs {format_mtime(mtime2)}, "
            f"newer in {source}"
        )
        return FreshnessResult(source, destination, comparable=True)
