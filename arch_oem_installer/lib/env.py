from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    mount_point: str = "/mnt"
    recovery_work_dir: str = "/tmp/arch_recovery_build"
    efivars_dir: str = "/sys/firmware/efi/efivars"
    state_default: str = "/var/lib/arch-oem-installer/state.json"
    log_default: str = "/var/log/arch-oem-installer.log"


PATHS = Paths()
