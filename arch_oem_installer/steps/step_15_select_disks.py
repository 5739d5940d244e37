from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from ..errors import InstallerAbort
from ..lib.block import list_disks
from ..selection import (
    CONFIRM_PHRASE,
    DiskSelection,
    confirm_destruction,
    validate_root_size,
    validate_selection,
)

logger = logging.getLogger(__name__)

BANNER = "=" * 66
ALARM = "!" * 66


class SelectDisksStep:
    """Collect main disk, home disk and root size, then gate on the phrase.

    This is the last step before anything destructive runs.
    """

    step_id = "15_select_disks"

    def __init__(self, ask: Callable[[str], str] = input, out: Callable[[str], None] = print) -> None:
        self.ask = ask
        self.out = out

    def _prompt(self, text: str) -> str:
        # Ctrl-D at a prompt is the operator walking away, not a crash.
        try:
            return self.ask(text)
        except EOFError:
            self.out("")
            raise InstallerAbort("Aborted.") from None

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        self.out(BANNER)
        self.out("      ARCH LINUX OEM-STYLE INSTALLER")
        self.out(BANNER)
        self.out("This will wipe two drives to create:")
        self.out("1. MAIN DISK: Boot, Recovery (SquashFS), Var, Root")
        self.out("2. HOME DISK: Home Partition")
        self.out(BANNER)

        for disk in list_disks(dry_run=dry_run):
            self.out(f"{disk.path}  {disk.size}  {disk.model}".rstrip())
        self.out("")

        main_disk = self._prompt("Select MAIN DISK (e.g. /dev/nvme0n1): ").strip()
        home_disk = self._prompt("Select HOME DISK (e.g. /dev/sda): ").strip()
        root_size = self._prompt("Enter Size for Root Partition (e.g. 50G): ").strip()

        validate_selection(main_disk, home_disk)
        validate_root_size(root_size)

        self.out(ALARM)
        self.out(f"WARNING: ALL DATA ON {main_disk} AND {home_disk} WILL BE DESTROYED.")
        self.out(ALARM)
        confirm_destruction(self._prompt(f"Type '{CONFIRM_PHRASE}' to continue: "))

        selection = DiskSelection(main_disk=main_disk, home_disk=home_disk, root_size=root_size)
        state["selection"] = selection.as_dict()
        logger.info("Confirmed main_disk=%s home_disk=%s root_size=%s", main_disk, home_disk, root_size)
        return state
