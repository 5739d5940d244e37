from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from ..lib.chroot import chroot_cmd

logger = logging.getLogger(__name__)

RULE = "-" * 66


class SetRootPasswordStep:
    step_id = "95_set_password"

    def __init__(self, out: Callable[[str], None] = print) -> None:
        self.out = out

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.get("execution") or {}
        target_root = exe.get("mount_point")
        if not target_root:
            raise RuntimeError("execution.mount_point missing; run 50_mount first")

        dry_run = bool(cfg.get("dry_run", False))

        self.out(RULE)
        self.out("INSTALLATION COMPLETE!")
        self.out(RULE)
        self.out("You now have:")
        self.out("1. Arch Linux (Main)")
        self.out("2. Arch Linux Recovery (SquashFS/Immutable)")
        self.out("3. Separate Home Disk")
        self.out("4. Separate Var Partition")
        self.out("")
        self.out("Please set your root password now:")

        # passwd reads from the terminal itself; nothing is captured or logged.
        chroot_cmd(target_root, ["passwd"], interactive=True, dry_run=dry_run)

        self.out("")
        self.out("Type 'reboot' to start your new system.")
        return state
