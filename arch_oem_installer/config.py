from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .lib.env import PATHS

HOST_PACKAGES = ["squashfs-tools", "gptfdisk", "dosfstools", "arch-install-scripts"]
RECOVERY_PACKAGES = ["base", "linux", "linux-firmware", "vim", "networkmanager", "gptfdisk", "dosfstools"]
MAIN_PACKAGES = ["base", "linux", "linux-firmware", "vim", "networkmanager", "sudo", "man-db", "git"]


def _str_list(value: Any, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if not isinstance(value, list):
        raise ValueError(f"Expected a list of package names, got {type(value).__name__}")
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)
    dry_run: bool = False

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.raw.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"installer config section {name!r} must be a mapping, got {type(section).__name__}")
        return section

    @property
    def hostname(self) -> str:
        return str(self._section("system").get("hostname") or "arch-main").strip()

    @property
    def timezone(self) -> str:
        return str(self._section("system").get("timezone") or "UTC")

    @property
    def locale(self) -> str:
        return str(self._section("system").get("locale") or "en_US.UTF-8")

    @property
    def network_service(self) -> str:
        return str(self._section("system").get("network_service") or "NetworkManager")

    @property
    def mount_point(self) -> str:
        return str(self._section("paths").get("mount_point") or PATHS.mount_point)

    @property
    def recovery_work_dir(self) -> str:
        return str(self._section("paths").get("recovery_work_dir") or PATHS.recovery_work_dir)

    @property
    def efivars_dir(self) -> str:
        return str(self._section("paths").get("efivars_dir") or PATHS.efivars_dir)

    @property
    def host_packages(self) -> List[str]:
        return _str_list(self._section("packages").get("host"), HOST_PACKAGES)

    @property
    def recovery_packages(self) -> List[str]:
        return _str_list(self._section("packages").get("recovery"), RECOVERY_PACKAGES)

    @property
    def main_packages(self) -> List[str]:
        return _str_list(self._section("packages").get("main"), MAIN_PACKAGES)

    @property
    def loader_timeout(self) -> int:
        return int(self._section("bootloader").get("timeout") or 5)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "hostname": self.hostname,
            "timezone": self.timezone,
            "locale": self.locale,
            "network_service": self.network_service,
            "mount_point": self.mount_point,
            "recovery_work_dir": self.recovery_work_dir,
            "efivars_dir": self.efivars_dir,
            "host_packages": self.host_packages,
            "recovery_packages": self.recovery_packages,
            "main_packages": self.main_packages,
            "loader_timeout": self.loader_timeout,
        }


def load_config(path: str | None, *, dry_run: bool = False) -> InstallerConfig:
    if path is None:
        return InstallerConfig(dry_run=dry_run)

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("installer config must contain a mapping/object")

    cfg = InstallerConfig(raw=raw, dry_run=dry_run)
    # Resolve every property once so a malformed section fails before any step runs.
    cfg.as_dict()
    return cfg
