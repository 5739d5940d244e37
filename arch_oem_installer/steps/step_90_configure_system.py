from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.chroot import chroot_cmd

logger = logging.getLogger(__name__)


def _write_file(root: str, rel: str, contents: str, *, dry_run: bool) -> None:
    p = Path(root) / rel.lstrip("/")
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")


class ConfigureSystemStep:
    step_id = "90_configure_system"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        target_root = exe.get("mount_point")
        if not target_root:
            raise RuntimeError("execution.mount_point missing; run 50_mount first")

        dry_run = bool(cfg.get("dry_run", False))

        hostname = str(cfg.get("hostname", "arch-main")).strip() or "arch-main"
        timezone = str(cfg.get("timezone", "UTC"))
        locale = str(cfg.get("locale", "en_US.UTF-8"))
        network_service = str(cfg.get("network_service", "NetworkManager"))
        # locale.gen wants "<locale> <charset>", e.g. "en_US.UTF-8 UTF-8".
        charset = locale.split(".", 1)[1] if "." in locale else "UTF-8"

        logger.info("Setting up basics")
        _write_file(target_root, "/etc/hostname", hostname + "\n", dry_run=dry_run)

        chroot_cmd(target_root, ["ln", "-sf", f"/usr/share/zoneinfo/{timezone}", "/etc/localtime"], dry_run=dry_run)
        chroot_cmd(target_root, ["hwclock", "--systohc"], dry_run=dry_run)

        _write_file(target_root, "/etc/locale.gen", f"{locale} {charset}\n", dry_run=dry_run)
        chroot_cmd(target_root, ["locale-gen"], dry_run=dry_run)
        _write_file(target_root, "/etc/locale.conf", f"LANG={locale}\n", dry_run=dry_run)

        chroot_cmd(target_root, ["systemctl", "enable", network_service], dry_run=dry_run)

        decisions = exe.setdefault("decisions", {})
        decisions["hostname"] = hostname
        decisions["timezone"] = timezone
        decisions["locale"] = locale
        decisions["network_service"] = network_service
        logger.info("Configured hostname=%s timezone=%s locale=%s", hostname, timezone, locale)
        return state
