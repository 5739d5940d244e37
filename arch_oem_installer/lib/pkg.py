from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def pacman_sync_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    """Refresh the live host's sync databases and install ``packages``."""

    if not packages:
        return
    run_cmd(["pacman", "-Sy", "--noconfirm", *packages], dry_run=dry_run)


def pacstrap(target_root: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    # -K initialises an empty pacman keyring inside the target.
    if not packages:
        raise ValueError("pacstrap requires at least one package")
    run_cmd(["pacstrap", "-K", target_root, *packages], dry_run=dry_run)


def genfstab(target_root: str, *, dry_run: bool = False) -> Path:
    """Append a UUID-based fstab for everything mounted under ``target_root``."""

    r = run_cmd(["genfstab", "-U", target_root], dry_run=dry_run)
    fstab = Path(target_root) / "etc/fstab"
    if dry_run:
        logger.info("Would append generated entries to %s", str(fstab))
        return fstab
    fstab.parent.mkdir(parents=True, exist_ok=True)
    with fstab.open("a", encoding="utf-8") as f:
        f.write(r.stdout)
    return fstab
