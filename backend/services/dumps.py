"""Best-effort JSON dumps of upstream responses for debugging."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def write_dump(data_dir: str | Path, filename: str, payload) -> Path | None:
    """Write payload as pretty JSON under data_dir. Never raises."""
    try:
        directory = Path(data_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Could not write dump %s: %s", filename, e)
        return None
