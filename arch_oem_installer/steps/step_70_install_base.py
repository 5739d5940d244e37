from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import MAIN_PACKAGES
from ..lib.pkg import genfstab, pacstrap

logger = logging.getLogger(__name__)


class InstallBaseStep:
    step_id = "70_install_base"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        mount_point = exe.get("mount_point")
        if not mount_point:
            raise RuntimeError("execution.mount_point missing; run 50_mount first")

        dry_run = bool(cfg.get("dry_run", False))
        packages = list(cfg.get("main_packages") or MAIN_PACKAGES)

        logger.info("Installing MAIN Arch system into %s", mount_point)
        pacstrap(mount_point, packages, dry_run=dry_run)

        fstab = genfstab(mount_point, dry_run=dry_run)
        exe.setdefault("decisions", {})["main_packages"] = packages
        logger.info("Generated %s", str(fstab))
        return state
