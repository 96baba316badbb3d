"""Operator settings that change how conflicts and errors are handled."""

from enum import Enum


class ForceDirection(str, Enum):
    """Forced-direction override for files that differ on both roots."""

    NONE = "none"
    """Newer modification time wins"""

    ROOT1 = "root1"
    """The first root always wins"""

    ROOT2 = "root2"
    """The second root always wins"""

    @classmethod
    def from_string(cls, value: str) -> "ForceDirection":
        """Parse a force direction from its name or numeric alias.

        Args:
            value: "none", "root1", "root2" or "0", "1", "2"

        Returns:
            Matching ForceDirection

        Raises:
            ValueError: If the value is not recognised

        Examples:
            >>> ForceDirection.from_string("1")
            <ForceDirection.ROOT1: 'root1'>
        """
        aliases = {
            "none": cls.NONE,
            "0": cls.NONE,
            "root1": cls.ROOT1,
            "1": cls.ROOT1,
            "root2": cls.ROOT2,
            "2": cls.ROOT2,
        }
        key = value.strip().lower()
        if key not in aliases:
            raise ValueError(
                f"Invalid force direction: {value!r}. "
                f"Valid values: none, root1, root2 (or 0, 1, 2)"
            )
        return aliases[key]


class PathErrorPolicy(str, Enum):
    """What to do when a single path fails to copy or delete."""

    SKIP = "skip"
    """Log and continue; the path is retried on the next pass"""

    ABORT = "abort"
    """Stop the pass on the first failing path"""
