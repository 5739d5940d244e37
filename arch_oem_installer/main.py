from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, Dict, Optional

from .config import InstallerConfig, load_config
from .errors import InstallerAbort
from .lib.env import PATHS
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .state_store import ensure_defaults, save_state
from .steps import (
    BuildRecoveryStep,
    ConfigureSystemStep,
    FormatPartitionsStep,
    InstallBaseStep,
    InstallBootloaderStep,
    InstallDependenciesStep,
    MountTargetStep,
    PartitionDisksStep,
    PreflightStep,
    SelectDisksStep,
    SetRootPasswordStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default


def build_steps(ask: Callable[[str], str] = input, out: Callable[[str], None] = print):
    return [
        PreflightStep(),
        SelectDisksStep(ask=ask, out=out),
        InstallDependenciesStep(),
        PartitionDisksStep(),
        FormatPartitionsStep(),
        MountTargetStep(),
        BuildRecoveryStep(),
        InstallBaseStep(),
        InstallBootloaderStep(),
        ConfigureSystemStep(),
        SetRootPasswordStep(out=out),
    ]


def run(
    *,
    config: InstallerConfig,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    ask: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Run the installer pipeline once, recording the outcome in ``state_path``."""

    actual_log_path = configure_logging(log_path=log_path, verbose=verbose)

    state = ensure_defaults({})
    state["config"] = config.as_dict()
    state["execution"]["log_path"] = actual_log_path

    try:
        result = run_pipeline(state=state, steps=build_steps(ask=ask, out=out))
        state = result.state
        state["execution"]["ran_steps"] = result.ran_steps
        return state
    except Exception as e:
        # Aborts are expected operator outcomes; main() reports them without a traceback.
        if not isinstance(e, InstallerAbort):
            logger.exception("Installer failed")
        state["execution"]["errors"].append({"step": state["execution"].get("current_step"), "error": str(e)})
        raise
    finally:
        # The record is diagnostic; failing to write it must not mask the run's outcome.
        try:
            save_state(state_path, state)
        except OSError as e:
            logger.error("Unable to write run record %s: %s", state_path, e)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="arch-oem-installer")
    p.add_argument("--config", default=None, help="Path to installer config (yaml)")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to run record (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Log command output (DEBUG) to the log file")

    args = p.parse_args(argv)

    try:
        config = load_config(args.config, dry_run=bool(args.dry_run))
    except (OSError, ValueError) as e:
        p.error(f"invalid --config: {e}")

    try:
        run(config=config, state_path=args.state, log_path=args.log, verbose=bool(args.verbose))
    except InstallerAbort as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
