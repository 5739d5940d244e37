from __future__ import annotations

from pathlib import Path

from .env import PATHS


def is_uefi(efivars_dir: str = PATHS.efivars_dir) -> bool:
    """Return True when the *currently running* environment booted via UEFI.

    The kernel only exposes efivars when the firmware handed over in EFI mode.
    """

    return Path(efivars_dir).is_dir()
