from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Disk:
    path: str
    size: str
    model: str = ""


def part_name(disk: str, n: int) -> str:
    """Return the device node for partition ``n`` of ``disk``.

    NVMe namespaces end in a digit, so the kernel inserts a ``p`` separator
    (``/dev/nvme0n1p2``); conventional disks take the bare index (``/dev/sda1``).
    """

    if "nvme" in disk:
        return f"{disk}p{n}"
    return f"{disk}{n}"


def list_disks(*, dry_run: bool = False) -> List[Disk]:
    """List whole disks (no partitions, no loop devices) with full paths."""

    r = run_cmd(["lsblk", "-d", "-p", "-n", "-o", "NAME,SIZE,MODEL"], dry_run=dry_run)
    disks: List[Disk] = []
    for line in (r.stdout or "").splitlines():
        if not line.strip() or "loop" in line:
            continue
        parts = line.split(None, 2)
        disks.append(
            Disk(
                path=parts[0],
                size=parts[1] if len(parts) > 1 else "",
                model=parts[2].strip() if len(parts) > 2 else "",
            )
        )
    return disks


def _blkid_value(dev: str, tag: str, *, dry_run: bool) -> str:
    r = run_cmd(["blkid", "-s", tag, "-o", "value", dev], dry_run=dry_run)
    value = (r.stdout or "").strip()
    if not value and not dry_run:
        raise RuntimeError(f"Unable to determine {tag} for {dev}")
    return value


def get_uuid(dev: str, *, dry_run: bool = False) -> str:
    """Return filesystem UUID for a block device."""

    return _blkid_value(dev, "UUID", dry_run=dry_run)


def get_partuuid(dev: str, *, dry_run: bool = False) -> str:
    """Return GPT partition UUID for a partition node."""

    return _blkid_value(dev, "PARTUUID", dry_run=dry_run)
