from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

MAIN_ENTRY = "arch.conf"
RECOVERY_ENTRY = "recovery.conf"

RECOVERY_KERNEL = "vmlinuz-linux-recovery"
RECOVERY_INITRD = "initramfs-linux-recovery.img"


def install_systemd_boot(boot_dir: str, *, dry_run: bool = False) -> None:
    """Install systemd-boot into the mounted ESP."""

    run_cmd(["bootctl", f"--esp-path={boot_dir}", "install"], dry_run=dry_run)
    logger.info("systemd-boot installed into %s", boot_dir)


@dataclass(frozen=True)
class LoaderConfig:
    default: str = MAIN_ENTRY
    timeout: int = 5
    console_mode: str = "max"
    editor: bool = False

    def render(self) -> str:
        return (
            f"default  {self.default}\n"
            f"timeout  {self.timeout}\n"
            f"console-mode {self.console_mode}\n"
            f"editor   {'yes' if self.editor else 'no'}\n"
        )


@dataclass(frozen=True)
class BootEntry:
    filename: str
    title: str
    linux: str
    initrd: str
    options: str

    def render(self) -> str:
        return (
            f"title   {self.title}\n"
            f"linux   {self.linux}\n"
            f"initrd  {self.initrd}\n"
            f"options {self.options}\n"
        )


def main_entry(root_uuid: str) -> BootEntry:
    return BootEntry(
        filename=MAIN_ENTRY,
        title="Arch Linux",
        linux="/vmlinuz-linux",
        initrd="/initramfs-linux.img",
        options=f"root=UUID={root_uuid} rw",
    )


def recovery_entry(recovery_partuuid: str) -> BootEntry:
    # The squashfs sits on a bare partition: no filesystem UUID exists, so the
    # kernel must find it by PARTUUID and be told the fstype explicitly.
    return BootEntry(
        filename=RECOVERY_ENTRY,
        title="Arch Linux Recovery (Read-Only)",
        linux=f"/{RECOVERY_KERNEL}",
        initrd=f"/{RECOVERY_INITRD}",
        options=f"root=PARTUUID={recovery_partuuid} rootfstype=squashfs ro",
    )


def write_loader_config(
    *,
    boot_dir: str,
    loader: LoaderConfig,
    entries: Sequence[BootEntry],
    dry_run: bool = False,
) -> None:
    loader_dir = Path(boot_dir) / "loader"
    entries_dir = loader_dir / "entries"

    files = [(loader_dir / "loader.conf", loader.render())]
    files += [(entries_dir / e.filename, e.render()) for e in entries]

    for path, contents in files:
        if dry_run:
            logger.info("Would write %s", str(path))
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
        logger.info("Wrote %s", str(path))
