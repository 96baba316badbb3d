"""Core sync engine for reconciling two directory roots."""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..exceptions import SsyncRootError
from ..output import OutputFormatter
from ..utils import check_directory
from .comparator import FreshnessResolver
from .confirm import ConfirmFunc, delete_confirm, prompt_confirm
from .diff import not_in, union_sorted
from .manifest import ManifestStore
from .modes import PathErrorPolicy
from .operations import SyncOperations
from .pair import SyncPair
from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)


@dataclass
class SyncPlan:
    """Manifest and fresh snapshots of both roots, with derived diffs."""

    manifest: list[str]
    """Paths known at both roots after the previous sync"""

    snapshot1: list[str]
    """Paths currently under root1"""

    snapshot2: list[str]
    """Paths currently under root2"""

    deleted1: list[str] = field(init=False)
    """Deleted from root1 since last sync (to delete from root2)"""

    deleted2: list[str] = field(init=False)
    """Deleted from root2 since last sync (to delete from root1)"""

    added1: list[str] = field(init=False)
    """New in root1 since last sync (to copy to root2)"""

    added2: list[str] = field(init=False)
    """New in root2 since last sync (to copy to root1)"""

    common: list[str] = field(init=False)
    """Present at both roots (candidates for update)"""

    def __post_init__(self) -> None:
        self.deleted1 = not_in(self.snapshot1, self.manifest)
        self.deleted2 = not_in(self.snapshot2, self.manifest)
        self.added1 = not_in(self.manifest, self.snapshot1)
        self.added2 = not_in(self.manifest, self.snapshot2)
        only1 = not_in(self.snapshot2, self.snapshot1)
        self.common = not_in(only1, self.snapshot1)

    @property
    def first_run(self) -> bool:
        """Whether no previous manifest was found."""
        return not self.manifest


class SyncEngine:
    """Core sync engine that reconciles the two roots of a sync pair."""

    def __init__(
        self,
        output: Optional[OutputFormatter] = None,
        confirm: ConfirmFunc = prompt_confirm,
    ):
        """Initialize sync engine.

        Args:
            output: Output formatter for displaying progress/status
            confirm: Question callback used when a pair asks to confirm
                deletions
        """
        self.output = output or OutputFormatter()
        self.confirm = confirm

    def validate_pair(self, pair: SyncPair) -> None:
        """Check that both roots are distinct existing directories.

        Raises:
            SsyncRootError: If a root is invalid
        """
        root1 = check_directory(pair.root1)
        root2 = check_directory(pair.root2)
        if root1.resolve() == root2.resolve():
            raise SsyncRootError(f"Both roots point to the same directory: {root1}")

    def plan(self, pair: SyncPair) -> SyncPlan:
        """Load the manifest and scan both roots.

        Args:
            pair: Sync pair to inspect

        Returns:
            SyncPlan describing pending additions and deletions

        Raises:
            SsyncRootError: If a root is invalid
            SsyncScanError: If a root cannot be scanned
        """
        self.validate_pair(pair)

        scanner = DirectoryScanner(
            ignore_patterns=pair.ignore,
            exclude_dot_files=pair.exclude_dot_files,
        )

        # Entries the current ignore rules exclude are no longer tracked
        store = ManifestStore(pair.label)
        manifest = [
            entry
            for entry in store.load_any(pair.roots)
            if not scanner.is_excluded(entry)
        ]

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            disable=self.output.quiet or self.output.json_output,
        ) as progress:
            snapshots = []
            for root in pair.roots:
                scan_start = time.time()
                task = progress.add_task(f"Scanning {root}...", total=None)
                snapshot = scanner.scan(root)
                progress.update(task, description=f"Found {len(snapshot)} path(s)")
                logger.debug(
                    f"Scan of {root} took {time.time() - scan_start:.2f}s "
                    f"for {len(snapshot)} path(s)"
                )
                snapshots.append(snapshot)

        return SyncPlan(manifest, snapshots[0], snapshots[1])

    def sync_pair(
        self,
        pair: SyncPair,
        dry_run: bool = False,
        error_policy: PathErrorPolicy = PathErrorPolicy.SKIP,
    ) -> dict:
        """Run one reconciliation pass over a sync pair.

        Deletions are propagated first, then new paths, then updates to
        paths present at both roots. Finally the manifest is rebuilt from
        both roots and written to each of them.

        Args:
            pair: Sync pair to synchronize
            dry_run: If True, only show what would be done
            error_policy: How to handle a single path failing

        Returns:
            Dictionary with sync statistics

        Raises:
            SsyncRootError: If a root is invalid
            SsyncScanError: If a root cannot be scanned
            SsyncManifestError: If the manifest cannot be written
            SsyncPathError: If a path fails and error_policy is ABORT

        Examples:
            >>> engine = SyncEngine()
            >>> pair = SyncPair("docs", Path("/home/me/docs"), Path("/mnt/docs"))
            >>> stats = engine.sync_pair(pair, dry_run=True)
            >>> print(f"Would copy {stats['copied']} path(s)")
        """
        start_time = time.time()

        self.output.info(f"Label: {pair.label}")
        self.output.info(f"Root 1: {pair.root1}")
        self.output.info(f"Root 2: {pair.root2}")
        if dry_run:
            self.output.info("Dry run: No changes will be made")
        self.output.print("")

        # Step 1-2: Load manifest and scan both roots
        plan = self.plan(pair)
        if plan.first_run:
            self.output.info("No manifest found, treating as first sync")

        resolver = FreshnessResolver(pair.force, pair.roots)
        operations = SyncOperations(
            resolver=resolver, error_policy=error_policy, dry_run=dry_run
        )
        stats = self._create_empty_stats()
        deferred: list[str] = []
        root1, root2 = pair.roots

        # Step 3: Propagate deletions to the other root
        for deleted, other in ((plan.deleted1, root2), (plan.deleted2, root1)):
            # Already gone from both roots: drop from tracking silently
            deleted = operations.existing_paths(deleted, other)
            if not deleted:
                continue
            if pair.confirm_delete and not dry_run:
                if not delete_confirm(
                    deleted, other, operations, self.confirm, self.output
                ):
                    self.output.warning(
                        f"Deletion from {other} skipped, "
                        "it will be offered again next sync"
                    )
                    deferred = union_sorted(deferred, deleted)
                    stats["deferred"] += len(deleted)
                    continue
            removed = operations.delete(deleted, other)
            if removed:
                self.output.print_paths(f"Delete from {other}:", removed)
            stats["deleted"] += len(removed)

        # Step 4: Copy new paths to the other root
        for added, source, dest in (
            (plan.added1, root1, root2),
            (plan.added2, root2, root1),
        ):
            if not added:
                continue
            copied = operations.copy_all(added, source, dest)
            if copied:
                self.output.print_paths(f"New in {dest}:", copied)
            stats["copied"] += len(copied)

        # Step 5: Copy modified files in the direction of the newer copy
        updated: list[str] = []
        for rel_path in plan.common:
            result = resolver.resolve(rel_path, root1, root2)
            if result.source is None or result.destination is None:
                continue
            updated.extend(
                operations.copy_all([rel_path], result.source, result.destination)
            )
        if updated:
            self.output.print_paths("Updated:", updated)
        stats["updated"] = len(updated)
        stats["errors"] = len(operations.failed)

        # Step 6: Rebuild the manifest from what is now on disk
        if not dry_run:
            self._save_manifest(pair, deferred, operations.failed_copies)

        logger.debug(f"Sync of {pair.label} took {time.time() - start_time:.2f}s")

        if not self.output.quiet:
            self._display_summary(stats, dry_run)

        return stats

    def _save_manifest(
        self, pair: SyncPair, deferred: list[str], failed_copies: set[str]
    ) -> None:
        """Rescan both roots and write the union as the new manifest.

        A path whose copy failed and that exists on one side only is left
        out, so the next pass sees it as new again instead of deleted.
        """
        scanner = DirectoryScanner(
            ignore_patterns=pair.ignore,
            exclude_dot_files=pair.exclude_dot_files,
        )
        current = [scanner.scan(root) for root in pair.roots]
        entries = union_sorted(*current, deferred)
        if failed_copies:
            on_both = set(current[0]) & set(current[1])
            entries = [
                entry
                for entry in entries
                if entry not in failed_copies or entry in on_both
            ]
        ManifestStore(pair.label).save_all(pair.roots, entries)
        logger.debug(f"Manifest for {pair.label} now has {len(entries)} path(s)")

    def _create_empty_stats(self) -> dict:
        """Create an empty statistics dictionary.

        Returns:
            Dictionary with zero counts for all stat categories
        """
        return {
            "copied": 0,
            "updated": 0,
            "deleted": 0,
            "deferred": 0,
            "errors": 0,
        }

    def _display_summary(self, stats: dict, dry_run: bool) -> None:
        """Display sync summary.

        Args:
            stats: Statistics dictionary
            dry_run: Whether this was a dry run
        """
        self.output.print("")
        if dry_run:
            self.output.success("Dry run complete!")
        else:
            self.output.success("Sync complete!")

        total_actions = stats["copied"] + stats["updated"] + stats["deleted"]

        if total_actions > 0:
            self.output.info(f"Total actions: {total_actions}")
            if stats["copied"] > 0:
                self.output.info(f"  Copied: {stats['copied']}")
            if stats["updated"] > 0:
                self.output.info(f"  Updated: {stats['updated']}")
            if stats["deleted"] > 0:
                self.output.info(f"  Deleted: {stats['deleted']}")
        else:
            self.output.info("No changes needed - everything is in sync!")

        if stats["deferred"] > 0:
            self.output.warning(f"Deletions deferred: {stats['deferred']}")
        if stats["errors"] > 0:
            self.output.warning(
                f"{stats['errors']} path(s) failed and will be retried next sync"
            )
