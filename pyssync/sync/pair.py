"""Sync pair configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .manifest import manifest_file_name
from .modes import ForceDirection


@dataclass
class SyncPair:
    """Two roots kept in sync under a shared label.

    Examples:
        >>> pair = SyncPair("photos", Path("/home/me/Photos"), Path("/mnt/Photos"))
        >>> pair.force
        <ForceDirection.NONE: 'none'>
    """

    label: str
    """Label naming the manifest (.ssync-<label>) at both roots"""

    root1: Path
    """First root directory"""

    root2: Path
    """Second root directory"""

    confirm_delete: bool = False
    """Ask before propagating deletions"""

    force: ForceDirection = ForceDirection.NONE
    """Root that wins when a file differs on both sides"""

    ignore: list[str] = field(default_factory=list)
    """Glob patterns excluded from the sync"""

    exclude_dot_files: bool = False
    """Whether to exclude files/folders starting with dot"""

    def __post_init__(self) -> None:
        """Normalize field types and validate the label."""
        manifest_file_name(self.label)

        if isinstance(self.root1, str):
            self.root1 = Path(self.root1)
        if isinstance(self.root2, str):
            self.root2 = Path(self.root2)

        if isinstance(self.force, str) and not isinstance(self.force, ForceDirection):
            self.force = ForceDirection.from_string(self.force)

    @property
    def roots(self) -> tuple[Path, Path]:
        """Both roots, in order."""
        return (self.root1, self.root2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncPair":
        """Create a sync pair from a configuration dictionary.

        Args:
            data: Dictionary with keys label, root1, root2 and optionally
                confirmDelete, force, ignore, excludeDotFiles

        Returns:
            SyncPair instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        required = ["label", "root1", "root2"]
        missing = [key for key in required if key not in data]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        return cls(
            label=data["label"],
            root1=Path(data["root1"]),
            root2=Path(data["root2"]),
            confirm_delete=bool(data.get("confirmDelete", False)),
            force=ForceDirection.from_string(str(data.get("force", "none"))),
            ignore=list(data.get("ignore", [])),
            exclude_dot_files=bool(data.get("excludeDotFiles", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a configuration dictionary."""
        return {
            "label": self.label,
            "root1": str(self.root1),
            "root2": str(self.root2),
            "confirmDelete": self.confirm_delete,
            "force": self.force.value,
            "ignore": list(self.ignore),
            "excludeDotFiles": self.exclude_dot_files,
        }

    def __str__(self) -> str:
        return f"{self.label}: {self.root1} <-> {self.root2}"
