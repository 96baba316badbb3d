"""Loading sync pairs from a JSON configuration file."""

import json
import logging
from pathlib import Path

from ..exceptions import SsyncConfigError
from .pair import SyncPair

logger = logging.getLogger(__name__)


def load_sync_pairs_from_json(config_file: Path) -> list[SyncPair]:
    """Load sync pairs from a JSON file.

    The file holds a list of objects, for example::

        [
          {"label": "docs", "root1": "/home/me/docs", "root2": "/mnt/usb/docs",
           "confirmDelete": true, "force": "none", "ignore": ["*.tmp"]}
        ]

    Args:
        config_file: Path to the JSON file

    Returns:
        List of SyncPair objects, in file order

    Raises:
        SsyncConfigError: If the file cannot be read or is malformed
    """
    config_file = Path(config_file)
    try:
        with open(config_file, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SsyncConfigError(f"Cannot read {config_file}: {e}") from e
    except json.JSONDecodeError as e:
        raise SsyncConfigError(f"Invalid JSON in {config_file}: {e}") from e

    if not isinstance(data, list):
        raise SsyncConfigError(
            f"{config_file} must contain a list of sync pairs, "
            f"got {type(data).__name__}"
        )

    pairs: list[SyncPair] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise SsyncConfigError(f"Sync pair #{index + 1} must be an object")
        try:
            pairs.append(SyncPair.from_dict(item))
        except ValueError as e:
            raise SsyncConfigError(f"Sync pair #{index + 1}: {e}") from e

    logger.debug(f"Loaded {len(pairs)} sync pair(s) from {config_file}")
    return pairs
