"""Filesystem operations that apply a sync plan to a root."""

import logging
import os
import shutil
import stat
from contextlib import suppress
from pathlib import Path
from typing import Iterable, Optional

from ..exceptions import SsyncPathError
from ..utils import COPY_BUFFER_SIZE, DIR_MODE, TEMP_SUFFIX, resolve_relative
from .comparator import FreshnessResolver
from .modes import PathErrorPolicy

logger = logging.getLogger(__name__)


class SyncOperations:
    """Copy and delete operations between two sync roots.

    Every per-path failure goes through the configured PathErrorPolicy:
    with SKIP the path is logged and left for the next pass, with ABORT
    an SsyncPathError stops the pass.
    """

    def __init__(
        self,
        resolver: Optional[FreshnessResolver] = None,
        error_policy: PathErrorPolicy = PathErrorPolicy.SKIP,
        dry_run: bool = False,
    ):
        """Initialize sync operations.

        Args:
            resolver: Decides whether an existing destination file is stale
            error_policy: How to handle a path that fails to copy or delete
            dry_run: If True, report what would change without changing it
        """
        self.resolver = resolver or FreshnessResolver()
        self.error_policy = error_policy
        self.dry_run = dry_run
        self.failed: list[str] = []
        self.failed_copies: set[str] = set()

    def _path_failed(self, rel_path: str, action: str, error: OSError) -> None:
        """Apply the per-path error policy to a failed operation."""
        if self.error_policy == PathErrorPolicy.ABORT:
            raise SsyncPathError(rel_path, f"{action} failed: {error}") from error
        logger.warning(f"Skipping {rel_path}: {action} failed: {error}")
        self.failed.append(rel_path)
        if action == "copy":
            self.failed_copies.add(rel_path)

    def copy_all(
        self, paths: Iterable[str], source_root: Path, dest_root: Path
    ) -> list[str]:
        """Copy paths from source_root to dest_root.

        Paths that no longer exist at source_root are skipped. Directories
        are created on the destination; their contents are handled by
        their own entries. A file is copied only if the destination copy
        is missing or older than the source copy. A directory counts as
        copied only when it did not exist on the destination yet.

        Args:
            paths: Relative paths to copy
            source_root: Root to copy from
            dest_root: Root to copy to

        Returns:
            Relative paths that were copied (or would be, in dry run)
        """
        copied: list[str] = []

        for rel_path in paths:
            try:
                src_stat = resolve_relative(source_root, rel_path).stat()
            except OSError:
                logger.debug(f"{rel_path} is gone from {source_root}, skipping")
                continue

            dest = resolve_relative(dest_root, rel_path)
            try:
                if stat.S_ISDIR(src_stat.st_mode):
                    if not dest.is_dir():
                        if not self.dry_run:
                            dest.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
                        copied.append(rel_path)
                    continue

                result = self.resolver.resolve(rel_path, source_root, dest_root)
                if result.comparable and result.source != source_root:
                    continue

                if not self.dry_run:
                    dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
                    self.copy_file(rel_path, source_root, dest_root)
                copied.append(rel_path)
            except OSError as e:
                self._path_failed(rel_path, "copy", e)

        return copied

    def copy_file(self, rel_path: str, source_root: Path, dest_root: Path) -> None:
        """Copy one file and give the copy the source's modification time.

        The data is written to a temporary file next to the destination,
        flushed to disk, given the source's time and then moved into place,
        so the destination is never left half written.

        Args:
            rel_path: Relative path of the file
            source_root: Root to copy from
            dest_root: Root to copy to

        Raises:
            OSError: If reading, writing or setting the time fails
        """
        src = resolve_relative(source_root, rel_path)
        dest = resolve_relative(dest_root, rel_path)
        tmp = dest.with_name(dest.name + TEMP_SUFFIX)

        try:
            with open(src, "rb") as src_f:
                src_stat = os.fstat(src_f.fileno())
                with open(tmp, "wb") as tmp_f:
                    shutil.copyfileobj(src_f, tmp_f, COPY_BUFFER_SIZE)
                    tmp_f.flush()
                    os.fsync(tmp_f.fileno())
            os.utime(tmp, ns=(src_stat.st_mtime_ns, src_stat.st_mtime_ns))
            os.replace(tmp, dest)
        except OSError:
            with suppress(OSError):
                tmp.unlink()
            raise

        logger.debug(f"Copied {src} -> {dest}")

    def existing_paths(self, paths: Iterable[str], root: Path) -> list[str]:
        """Return the paths that currently exist under root."""
        return [
            rel_path
            for rel_path in paths
            if os.path.lexists(resolve_relative(root, rel_path))
        ]

    def delete(self, paths: Iterable[str], root: Path) -> list[str]:
        """Remove paths from root.

        Directories are removed with their contents. Paths that do not
        exist are skipped and not counted.

        Args:
            paths: Relative paths to remove
            root: Root to remove them from

        Returns:
            Relative paths that were removed (or would be, in dry run)
        """
        removed: list[str] = []

        for rel_path in self.existing_paths(paths, root):
            full_path = resolve_relative(root, rel_path)
            try:
                if not self.dry_run:
                    if full_path.is_dir() and not full_path.is_symlink():
                        shutil.rmtree(full_path)
                    else:
                        full_path.unlink()
                removed.append(rel_path)
            except FileNotFoundError:
                # Removed along with a parent directory earlier in the list
                continue
            except OSError as e:
                self._path_failed(rel_path, "delete", e)

        return removed


def rename_folder(source: Path, destination: Path) -> Path:
    """Rename source to destination without overwriting anything.

    If destination is taken, " (1)", " (2)", ... is appended to its final
    component until a free name is found. Missing parent directories of
    the destination are created.

    Args:
        source: Existing file or folder
        destination: Requested new path

    Returns:
        The path actually used, which may differ from destination

    Raises:
        OSError: If the parents cannot be created or the rename fails

    Examples:
        >>> rename_folder(Path("/data/b"), Path("/data/a"))  # /data/a exists
        PosixPath('/data/a (1)')
    """
    source = Path(source)
    destination = Path(destination)

    if os.path.lexists(destination):
        counter = 1
        while True:
            candidate = destination.with_name(f"{destination.name} ({counter})")
            if not os.path.lexists(candidate):
                destination = candidate
                break
            counter += 1

    destination.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    source.rename(destination)
    logger.debug(f"Renamed {source} -> {destination}")
    return destination
