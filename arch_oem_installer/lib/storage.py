from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence

from .block import part_name
from .command import run_cmd

logger = logging.getLogger(__name__)

# GPT type codes as understood by sgdisk.
TYPE_ESP = "ef00"
TYPE_LINUX = "8300"

# Seconds to let udev create partition nodes after partprobe.
SETTLE_SECONDS = 2.0


@dataclass(frozen=True)
class PartitionSpec:
    index: int
    size: str  # sgdisk end spec: "+1G", or "0" for the rest of the disk
    typecode: str
    label: str

    def sgdisk_args(self) -> List[str]:
        return [
            "-n",
            f"{self.index}:0:{self.size}",
            "-t",
            f"{self.index}:{self.typecode}",
            "-c",
            f"{self.index}:{self.label}",
        ]


@dataclass(frozen=True)
class TargetLayout:
    """Partition nodes of the two target disks, keyed by role."""

    boot: str
    recovery: str
    var: str
    root: str
    home: str

    @classmethod
    def for_disks(cls, main_disk: str, home_disk: str) -> "TargetLayout":
        return cls(
            boot=part_name(main_disk, 1),
            recovery=part_name(main_disk, 2),
            var=part_name(main_disk, 3),
            root=part_name(main_disk, 4),
            home=part_name(home_disk, 1),
        )

    def as_dict(self) -> Dict[str, str]:
        return {
            "boot": self.boot,
            "recovery": self.recovery,
            "var": self.var,
            "root": self.root,
            "home": self.home,
        }


def main_disk_plan(root_size: str) -> List[PartitionSpec]:
    """Fixed main disk layout: EFI, recovery image, /var, then root."""

    size = root_size.strip().lstrip("+")
    if not size:
        raise ValueError("Root partition size must not be empty")
    return [
        PartitionSpec(1, "+1G", TYPE_ESP, "EFI_System"),
        PartitionSpec(2, "+10G", TYPE_LINUX, "Recovery_Image"),
        PartitionSpec(3, "+1G", TYPE_LINUX, "Arch_Var"),
        PartitionSpec(4, f"+{size}", TYPE_LINUX, "Arch_Root"),
    ]


def home_disk_plan() -> List[PartitionSpec]:
    return [PartitionSpec(1, "0", TYPE_LINUX, "Arch_Home")]


def apply_partition_plan(disk: str, plan: Sequence[PartitionSpec], *, dry_run: bool = False) -> None:
    """Zap the GPT/MBR structures on ``disk`` and create ``plan`` in order."""

    logger.info("Partitioning disk=%s (%d partitions)", disk, len(plan))
    run_cmd(["sgdisk", "-Z", disk], dry_run=dry_run)
    for spec in plan:
        run_cmd(["sgdisk", *spec.sgdisk_args(), disk], dry_run=dry_run)


def rescan_disks(disks: Sequence[str], *, settle_seconds: float = SETTLE_SECONDS, dry_run: bool = False) -> None:
    for disk in disks:
        run_cmd(["partprobe", disk], dry_run=dry_run)
    if not dry_run:
        time.sleep(settle_seconds)


@dataclass(frozen=True)
class Filesystem:
    device: str
    fstype: str  # vfat|ext4
    label: str


def format_partition(fs: Filesystem, *, dry_run: bool = False) -> None:
    if fs.fstype == "vfat":
        argv = ["mkfs.fat", "-F32", "-n", fs.label, fs.device]
    elif fs.fstype == "ext4":
        argv = ["mkfs.ext4", "-F", "-L", fs.label, fs.device]
    else:
        raise ValueError(f"Unsupported filesystem type: {fs.fstype}")
    run_cmd(argv, dry_run=dry_run)


def target_filesystems(layout: TargetLayout) -> List[Filesystem]:
    # The recovery partition is written raw by mksquashfs and gets no filesystem here.
    return [
        Filesystem(layout.boot, "vfat", "BOOT"),
        Filesystem(layout.root, "ext4", "ROOT"),
        Filesystem(layout.var, "ext4", "VAR"),
        Filesystem(layout.home, "ext4", "HOME"),
    ]


def mount_hierarchy(layout: TargetLayout, mount_point: str, *, dry_run: bool = False) -> None:
    """Mount root first, then the children that live inside it."""

    root = Path(mount_point)
    run_cmd(["mkdir", "-p", str(root)], dry_run=dry_run)
    run_cmd(["mount", layout.root, str(root)], dry_run=dry_run)
    for sub, dev in [("boot", layout.boot), ("var", layout.var), ("home", layout.home)]:
        run_cmd(["mkdir", "-p", str(root / sub)], dry_run=dry_run)
        run_cmd(["mount", dev, str(root / sub)], dry_run=dry_run)
