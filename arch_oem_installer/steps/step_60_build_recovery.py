from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict

from ..config import RECOVERY_PACKAGES
from ..lib.bootloader import RECOVERY_INITRD, RECOVERY_KERNEL
from ..lib.env import PATHS
from ..lib.pkg import pacstrap
from ..lib.squashfs import device_size_bytes, mksquashfs, tree_size_bytes
from .step_40_format import layout_from_state

logger = logging.getLogger(__name__)

RECOVERY_FSTAB = "tmpfs /tmp tmpfs defaults,noatime,mode=1777 0 0\n"


class BuildRecoveryStep:
    """Bootstrap a minimal Arch tree and squash it onto the recovery partition.

    The kernel and initramfs are copied out to the ESP first because
    systemd-boot cannot read them from inside a squashfs.
    """

    step_id = "60_build_recovery"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        mount_point = exe.get("mount_point")
        if not mount_point:
            raise RuntimeError("execution.mount_point missing; run 50_mount first")
        layout = layout_from_state(state)

        dry_run = bool(cfg.get("dry_run", False))
        work = Path(str(cfg.get("recovery_work_dir") or PATHS.recovery_work_dir))
        packages = list(cfg.get("recovery_packages") or RECOVERY_PACKAGES)
        boot = Path(mount_point) / "boot"

        logger.info("Building immutable recovery system in %s (this takes time)", str(work))
        if dry_run:
            logger.info("Would recreate %s", str(work))
        else:
            shutil.rmtree(work, ignore_errors=True)
            work.mkdir(parents=True)

        pacstrap(str(work), packages, dry_run=dry_run)

        if dry_run:
            logger.info("Would write %s", str(work / "etc/fstab"))
        else:
            (work / "etc").mkdir(parents=True, exist_ok=True)
            (work / "etc/fstab").write_text(RECOVERY_FSTAB, encoding="utf-8")

        self._check_capacity(state, str(work), layout.recovery, dry_run=dry_run)

        logger.info("Extracting recovery kernel to %s", str(boot))
        for src, dst in [
            (work / "boot/vmlinuz-linux", boot / RECOVERY_KERNEL),
            (work / "boot/initramfs-linux.img", boot / RECOVERY_INITRD),
        ]:
            if dry_run:
                logger.info("Would copy %s -> %s", str(src), str(dst))
            else:
                shutil.copyfile(src, dst)

        logger.info("Compressing recovery system into %s (SquashFS)", layout.recovery)
        mksquashfs(str(work), layout.recovery, dry_run=dry_run)

        if dry_run:
            logger.info("Would remove %s", str(work))
        else:
            shutil.rmtree(work)

        exe.setdefault("decisions", {})["recovery_packages"] = packages
        return state

    def _check_capacity(self, state: Dict[str, Any], work: str, device: str, *, dry_run: bool) -> None:
        # Only a warning: zstd usually shrinks the tree well below its raw size.
        tree = tree_size_bytes(work, dry_run=dry_run)
        capacity = device_size_bytes(device, dry_run=dry_run)
        if tree and capacity and tree > capacity:
            logger.warning(
                "Recovery tree is %d bytes uncompressed but %s holds %d bytes; mksquashfs may run out of space",
                tree,
                device,
                capacity,
            )
            state.setdefault("execution", {}).setdefault("warnings", []).append(
                {"recovery_tree_bytes": tree, "recovery_partition_bytes": capacity}
            )
