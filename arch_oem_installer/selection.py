"""Operator disk selection and the destructive-action gate.

Nothing in this module touches a disk. Every check here must pass before the
partitioning step is allowed to run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .errors import InstallerAbort

CONFIRM_PHRASE = "DESTROY"


@dataclass(frozen=True)
class DiskSelection:
    main_disk: str
    home_disk: str
    root_size: str

    def as_dict(self) -> Dict[str, Any]:
        return {"main_disk": self.main_disk, "home_disk": self.home_disk, "root_size": self.root_size}


def validate_selection(main_disk: str, home_disk: str) -> None:
    if not main_disk or not home_disk:
        raise InstallerAbort("Error: Disks cannot be empty.")
    if main_disk == home_disk:
        raise InstallerAbort("Error: Main disk and Home disk must be different for this layout.")


def validate_root_size(root_size: str) -> None:
    if not root_size.strip():
        raise InstallerAbort("Error: Root partition size cannot be empty.")


def confirm_destruction(answer: str) -> None:
    # Exact, case-sensitive match. "destroy" or " DESTROY" do not count.
    if answer != CONFIRM_PHRASE:
        raise InstallerAbort("Aborted.")
