from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.storage import TargetLayout, format_partition, target_filesystems

logger = logging.getLogger(__name__)


def layout_from_state(state: Dict[str, Any]) -> TargetLayout:
    parts = (state.get("execution") or {}).get("partitions") or {}
    try:
        return TargetLayout(**{k: parts[k] for k in ("boot", "recovery", "var", "root", "home")})
    except KeyError as e:
        raise RuntimeError(f"Missing partition {e.args[0]!r}; run 30_partition first") from e


class FormatPartitionsStep:
    step_id = "40_format"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        layout = layout_from_state(state)

        logger.info("Formatting partitions...")
        for fs in target_filesystems(layout):
            format_partition(fs, dry_run=dry_run)
        return state
