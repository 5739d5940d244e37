from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import InstallerAbort
from ..lib.env import PATHS
from ..lib.firmware import is_uefi

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        efivars_dir = str(cfg.get("efivars_dir") or PATHS.efivars_dir)

        # systemd-boot and the ESP layout only make sense on UEFI.
        if not is_uefi(efivars_dir):
            raise InstallerAbort("Error: System is not booted in UEFI mode. Aborting.")

        state.setdefault("execution", {}).setdefault("decisions", {})["firmware"] = "efi"
        logger.info("UEFI firmware detected (%s)", efivars_dir)
        return state
