from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.storage import (
    TargetLayout,
    apply_partition_plan,
    home_disk_plan,
    main_disk_plan,
    rescan_disks,
)

logger = logging.getLogger(__name__)


class PartitionDisksStep:
    step_id = "30_partition"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        sel = state.get("selection") or {}
        main_disk = sel.get("main_disk")
        home_disk = sel.get("home_disk")
        root_size = sel.get("root_size")
        if not main_disk or not home_disk or not root_size:
            raise RuntimeError("Missing disk selection; run 15_select_disks first")

        dry_run = bool(cfg.get("dry_run", False))

        logger.info("Partitioning Main Disk: %s", main_disk)
        apply_partition_plan(main_disk, main_disk_plan(str(root_size)), dry_run=dry_run)

        logger.info("Partitioning Home Disk: %s", home_disk)
        apply_partition_plan(home_disk, home_disk_plan(), dry_run=dry_run)

        layout = TargetLayout.for_disks(main_disk, home_disk)
        rescan_disks([main_disk, home_disk], dry_run=dry_run)

        state.setdefault("execution", {})["partitions"] = layout.as_dict()
        logger.info("Partitions: %s", layout.as_dict())
        return state
