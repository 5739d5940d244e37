from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_LOG_PATH = "/var/log/arch-oem-installer.log"
FALLBACK_LOG_NAME = "arch-oem-installer.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


class _InstallerFileHandler(logging.FileHandler):
    """File handler owned by the installer, so reconfiguring can find it."""


def _open_log_file(log_path: str) -> _InstallerFileHandler:
    # The live ISO's /var/log is normally writable; a read-only or odd
    # environment gets the log next to wherever the installer was started.
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return _InstallerFileHandler(log_path)
    except OSError:
        return _InstallerFileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> str:
    """Send installer logs to ``log_path`` and the console.

    The console always shows INFO: prompts and banners share the terminal
    with it. ``verbose`` lowers the file to DEBUG, which is where
    :func:`~arch_oem_installer.lib.command.run_cmd` records each command's
    stdout and stderr.

    Calling this again replaces the installer's handlers instead of stacking
    new ones. Returns the path of the file actually written.
    """

    root = logging.getLogger()
    for h in [h for h in root.handlers if isinstance(h, _InstallerFileHandler) or getattr(h, "_installer", False)]:
        root.removeHandler(h)
        h.close()

    file_handler = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(_FORMAT)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(_FORMAT)
        setattr(console, "_installer", True)
        root.addHandler(console)

    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    chosen_path = file_handler.baseFilename
    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s, verbose=%s)", log_path, chosen_path, verbose
    )
    return chosen_path
