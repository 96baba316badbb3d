"""CLI interface for pyssync."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .exceptions import SsyncError
from .output import OutputFormatter
from .sync import (
    ForceDirection,
    ManifestStore,
    PathErrorPolicy,
    SyncEngine,
    SyncPair,
    load_sync_pairs_from_json,
    rename_folder,
)

logger = logging.getLogger(__name__)

FORCE_CHOICES = ["none", "root1", "root2", "0", "1", "2"]


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option()
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """pyssync - Two-way sync of directories with a shared manifest."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    # Configure logging based on verbose flag
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pyssync").setLevel(logging.DEBUG)
    else:
        # Set default logging level to WARNING to suppress debug/info messages
        logging.basicConfig(level=logging.WARNING)


def _pair_from_args(
    out: OutputFormatter,
    ctx: Any,
    label: Optional[str],
    root1: Optional[str],
    root2: Optional[str],
) -> SyncPair:
    """Build a sync pair from positional arguments or exit with an error."""
    if not label or not root1 or not root2:
        out.error("LABEL, ROOT1 and ROOT2 are required")
        ctx.exit(1)
    try:
        return SyncPair(label=label, root1=Path(root1), root2=Path(root2))
    except ValueError as e:
        out.error(str(e))
        ctx.exit(1)
        raise  # Unreachable, but helps type checker


@main.command()
@click.argument("label", required=False)
@click.argument("root1", required=False, type=click.Path())
@click.argument("root2", required=False, type=click.Path())
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with a list of sync pairs to sync in order",
)
@click.option(
    "--confirm/--no-confirm",
    default=False,
    envvar="SSYNC_CONFIRM",
    help="Ask before propagating deletions (default: no)",
)
@click.option(
    "--force",
    type=click.Choice(FORCE_CHOICES, case_sensitive=False),
    default="none",
    envvar="SSYNC_FORCE",
    help="Root that always wins when a file differs on both sides",
)
@click.option(
    "--ignore",
    "-i",
    multiple=True,
    help="Glob pattern to leave out of the sync (repeatable)",
)
@click.option(
    "--exclude-dot-files",
    is_flag=True,
    help="Leave files and folders starting with a dot out of the sync",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would be synced without syncing"
)
@click.option(
    "--strict",
    is_flag=True,
    help="Stop on the first path that fails instead of skipping it",
)
@click.pass_context
def sync(
    ctx: Any,
    label: Optional[str],
    root1: Optional[str],
    root2: Optional[str],
    config_file: Optional[str],
    confirm: bool,
    force: str,
    ignore: tuple[str, ...],
    exclude_dot_files: bool,
    dry_run: bool,
    strict: bool,
) -> None:
    """Sync two directories in both directions.

    LABEL names the sync; its manifest is kept as .ssync-LABEL in both
    ROOT1 and ROOT2 and records which paths existed after the last sync.

    Examples:
        pyssync sync photos ~/Photos /mnt/usb/Photos
        pyssync sync photos ~/Photos /mnt/usb/Photos --confirm
        pyssync sync photos ~/Photos /mnt/usb/Photos --force root1
        pyssync sync docs ./docs ./backup -i "*.tmp" --dry-run
        pyssync sync --config ~/.config/pyssync/pairs.json
    """
    out: OutputFormatter = ctx.obj["out"]

    if config_file is not None:
        if label or root1 or root2:
            out.error("Cannot combine --config with LABEL ROOT1 ROOT2")
            ctx.exit(1)
        try:
            pairs = load_sync_pairs_from_json(Path(config_file))
        except SsyncError as e:
            out.error(str(e))
            ctx.exit(1)
            return  # Unreachable, but helps type checker
        if not pairs:
            out.warning(f"No sync pairs in {config_file}")
            return
    else:
        pair = _pair_from_args(out, ctx, label, root1, root2)
        pair.confirm_delete = confirm
        pair.force = ForceDirection.from_string(force)
        pair.ignore = list(ignore)
        pair.exclude_dot_files = exclude_dot_files
        pairs = [pair]

    error_policy = PathErrorPolicy.ABORT if strict else PathErrorPolicy.SKIP
    engine = SyncEngine(out)
    results = []

    try:
        for pair in pairs:
            stats = engine.sync_pair(pair, dry_run=dry_run, error_policy=error_policy)
            results.append({"label": pair.label, **stats})
    except KeyboardInterrupt:
        out.warning("\nSync cancelled by user")
        ctx.exit(130)
    except SsyncError as e:
        out.error(str(e))
        ctx.exit(1)

    if out.json_output:
        out.output_json(results if len(results) > 1 else results[0])


@main.command()
@click.argument("label")
@click.argument("root1", type=click.Path())
@click.argument("root2", type=click.Path())
@click.option("--ignore", "-i", multiple=True, help="Glob pattern to leave out")
@click.option("--exclude-dot-files", is_flag=True, help="Leave out dot files")
@click.pass_context
def status(
    ctx: Any,
    label: str,
    root1: str,
    root2: str,
    ignore: tuple[str, ...],
    exclude_dot_files: bool,
) -> None:
    """Show what the next sync of LABEL would add and delete.

    Nothing is changed on disk.
    """
    out: OutputFormatter = ctx.obj["out"]
    pair = _pair_from_args(out, ctx, label, root1, root2)
    pair.ignore = list(ignore)
    pair.exclude_dot_files = exclude_dot_files

    try:
        plan = SyncEngine(out).plan(pair)
    except SsyncError as e:
        out.error(str(e))
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    if out.json_output:
        out.output_json(
            {
                "label": pair.label,
                "manifest": len(plan.manifest),
                "new_in_root1": plan.added1,
                "new_in_root2": plan.added2,
                "deleted_from_root1": plan.deleted1,
                "deleted_from_root2": plan.deleted2,
            }
        )
        return

    if plan.first_run:
        out.info("No manifest found, next sync is a first sync")
    else:
        out.info(f"Manifest: {len(plan.manifest)} path(s)")

    out.print_paths(f"New in {pair.root1}:", plan.added1)
    out.print_paths(f"New in {pair.root2}:", plan.added2)
    out.print_paths(f"Deleted from {pair.root1}:", plan.deleted1)
    out.print_paths(f"Deleted from {pair.root2}:", plan.deleted2)


@main.command()
@click.argument("label")
@click.argument("root1", type=click.Path(exists=True, file_okay=False))
@click.argument("root2", type=click.Path(exists=True, file_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def reset(ctx: Any, label: str, root1: str, root2: str, yes: bool) -> None:
    """Forget the sync history of LABEL.

    Removes .ssync-LABEL from both roots; the next sync treats every path
    as new and deletes nothing.
    """
    out: OutputFormatter = ctx.obj["out"]
    pair = _pair_from_args(out, ctx, label, root1, root2)

    if not yes and not click.confirm(f"Remove the manifest for '{label}'?"):
        out.warning("Reset cancelled.")
        return

    removed = ManifestStore(pair.label).clear(pair.roots)
    if out.json_output:
        out.output_json({"label": pair.label, "removed": removed})
    else:
        out.success(f"Removed {removed} manifest file(s)")


@main.command()
@click.argument("source", type=click.Path(exists=True))
@click.argument("destination", type=click.Path())
@click.pass_context
def rename(ctx: Any, source: str, destination: str) -> None:
    """Move SOURCE to DESTINATION without overwriting anything.

    If DESTINATION is taken, " (1)", " (2)", ... is appended to its name.

    Examples:
        pyssync rename ~/inbox/album ~/Music/album
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        final = rename_folder(Path(source), Path(destination))
    except OSError as e:
        out.error(f"Cannot rename {source}: {e}")
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    if out.json_output:
        out.output_json({"source": source, "destination": str(final)})
    elif final != Path(destination):
        out.warning(f"{destination} exists, renamed to {final}")
    else:
        out.success(f"Renamed to {final}")


if __name__ == "__main__":
    main()
