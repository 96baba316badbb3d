"""pyssync - two-way directory synchronizer driven by a shared manifest."""

from .exceptions import (
    SsyncConfigError,
    SsyncError,
    SsyncManifestError,
    SsyncPathError,
    SsyncRootError,
    SsyncScanError,
)
from .sync import ForceDirection, SyncEngine, SyncPair, rename_folder
from .utils import check_directory

__all__ = [
    "SyncEngine",
    "SyncPair",
    "ForceDirection",
    "rename_folder",
    "check_directory",
    "SsyncError",
    "SsyncRootError",
    "SsyncScanError",
    "SsyncManifestError",
    "SsyncPathError",
    "SsyncConfigError",
]
