from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.block import get_partuuid, get_uuid
from ..lib.bootloader import (
    LoaderConfig,
    install_systemd_boot,
    main_entry,
    recovery_entry,
    write_loader_config,
)
from .step_40_format import layout_from_state

logger = logging.getLogger(__name__)


class InstallBootloaderStep:
    step_id = "80_bootloader"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        mount_point = exe.get("mount_point")
        if not mount_point:
            raise RuntimeError("execution.mount_point missing; run 50_mount first")
        layout = layout_from_state(state)

        dry_run = bool(cfg.get("dry_run", False))
        boot_dir = str(Path(mount_point) / "boot")

        logger.info("Configuring systemd-boot")
        install_systemd_boot(boot_dir, dry_run=dry_run)

        # Both IDs only exist once the partitions are formatted/created.
        root_uuid = get_uuid(layout.root, dry_run=dry_run)
        recovery_partuuid = get_partuuid(layout.recovery, dry_run=dry_run)

        write_loader_config(
            boot_dir=boot_dir,
            loader=LoaderConfig(timeout=int(cfg.get("loader_timeout", 5))),
            entries=[main_entry(root_uuid), recovery_entry(recovery_partuuid)],
            dry_run=dry_run,
        )

        decisions = exe.setdefault("decisions", {})
        decisions["root_uuid"] = root_uuid
        decisions["recovery_partuuid"] = recovery_partuuid
        logger.info("Boot entries written (root_uuid=%s recovery_partuuid=%s)", root_uuid, recovery_partuuid)
        return state
