from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import HOST_PACKAGES
from ..lib.pkg import pacman_sync_install

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "20_install_deps"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        packages = list(cfg.get("host_packages") or HOST_PACKAGES)

        logger.info("Installing necessary tools (%s)", " ".join(packages))
        pacman_sync_install(packages, dry_run=dry_run)
        return state
