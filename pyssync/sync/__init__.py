"""Sync engine for pyssync - two-way reconciliation of directory roots."""

from .comparator import FreshnessResolver, FreshnessResult
from .config import load_sync_pairs_from_json
from .confirm import delete_confirm, prompt_confirm
from .diff import not_in, union_sorted
from .engine import SyncEngine, SyncPlan
from .manifest import ManifestStore, manifest_file_name
from .modes import ForceDirection, PathErrorPolicy
from .operations import SyncOperations, rename_folder
from .pair import SyncPair
from .scanner import DirectoryScanner, list_paths

__all__ = [
    "SyncEngine",
    "SyncPlan",
    "SyncPair",
    "SyncOperations",
    "rename_folder",
    "load_sync_pairs_from_json",
    "DirectoryScanner",
    "list_paths",
    "ManifestStore",
    "manifest_file_name",
    "FreshnessResolver",
    "FreshnessResult",
    "ForceDirection",
    "PathErrorPolicy",
    "delete_confirm",
    "prompt_confirm",
    "not_in",
    "union_sorted",
]
