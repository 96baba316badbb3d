"""Interactive confirmation before propagating deletions."""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

import click

from ..output import OutputFormatter
from .operations import SyncOperations

logger = logging.getLogger(__name__)

ConfirmFunc = Callable[[str], bool]


def prompt_confirm(message: str) -> bool:
    """Ask a yes/no question on standard input.

    Only an exact "Y" counts as yes; anything else, including an empty
    answer or one with surrounding spaces, is no.
    """
    answer = click.prompt(message, default="", show_default=False)
    return answer == "Y"


def delete_confirm(
    paths: Sequence[str],
    root: Path,
    operations: SyncOperations,
    confirm: ConfirmFunc = prompt_confirm,
    output: Optional[OutputFormatter] = None,
) -> bool:
    """Show which paths would be deleted from root and ask to proceed.

    Args:
        paths: Candidate deletions, relative to root
        root: Root the paths would be deleted from
        operations: Used to find which candidates still exist
        confirm: Question callback returning the operator's answer
        output: Where to list the candidates

    Returns:
        True if the operator confirmed, False if declined or nothing to delete
    """
    existing = operations.existing_paths(paths, root)
    if output is not None:
        output.print_paths(f"Simulate delete from '{root}':", existing)

    if not existing:
        logger.debug(f"Nothing to delete from {root}")
        return False

    answer = confirm(
        f"Delete {len(existing)} path(s) from {root}? Type Y to confirm"
    )
    logger.debug(f"Delete from {root} confirmed: {answer}")
    return answer
