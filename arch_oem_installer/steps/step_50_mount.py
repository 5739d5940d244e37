from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PATHS
from ..lib.storage import mount_hierarchy
from .step_40_format import layout_from_state

logger = logging.getLogger(__name__)


class MountTargetStep:
    step_id = "50_mount"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        layout = layout_from_state(state)
        mount_point = str(cfg.get("mount_point") or PATHS.mount_point)

        logger.info("Mounting Main OS structure at %s", mount_point)
        mount_hierarchy(layout, mount_point, dry_run=dry_run)

        state.setdefault("execution", {})["mount_point"] = mount_point
        return state
