"""Utility functions for pyssync."""

from datetime import datetime
from pathlib import Path
from typing import Union

from .exceptions import SsyncRootError

# =============================================================================
# Constants
# =============================================================================

# Prefix of the manifest file kept at each root, followed by the label
MANIFEST_PREFIX: str = ".ssync-"

# Suffix of the temporary file a copy is written to before replacing the target
TEMP_SUFFIX: str = ".ssync-tmp"

# Mode for directories created on the destination side (umask applies)
DIR_MODE: int = 0o777

# Buffer size for streaming file copies (1 MB)
COPY_BUFFER_SIZE: int = 1024 * 1024


# =============================================================================
# Path utilities
# =============================================================================


def check_directory(path: Union[str, Path]) -> Path:
    """Validate that a path is an existing directory.

    Args:
        path: Path to check

    Returns:
        The path, normalized

    Raises:
        SsyncRootError: If the path does not exist or is not a directory

    Examples:
        >>> check_directory("/tmp")
        PosixPath('/tmp')
    """
    path = Path(path)
    if not path.is_dir():
        raise SsyncRootError(f"'{path}' is not a directory")
    return path


def resolve_relative(root: Path, rel_path: str) -> Path:
    """Join a POSIX-style relative path onto a root directory."""
    return root.joinpath(*rel_path.split("/"))


# =============================================================================
# Formatting utilities
# =============================================================================


def format_mtime(mtime: float) -> str:
    """Format a modification time for display.

    Args:
        mtime: Unix timestamp

    Returns:
        Local time as "YYYY-MM-DD HH:MM:SS"
    """
    return datetime.fromtimestamp(mtime).strftime("%Y-%m-%d %H:%M:%S")
