"""
Pytest configuration and shared fixtures for arch-oem-installer tests.

External tools are never executed: ``subprocess.run`` is replaced by a
recorder that answers the handful of queries the installer makes.
"""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional

import pytest

ROOT_UUID = "0f3c2a9e-6b1d-4c7e-9a51-2d8e4f6b7c10"
RECOVERY_PARTUUID = "7a1b2c3d-0001-4e5f-8a9b-0c1d2e3f4a5b"


class FakeTools:
    """Stand-in for the external tools, recording every argv it sees."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.fail_on: Optional[str] = None
        self.lsblk_output = (
            "/dev/loop0     800M \n"
            "/dev/nvme0n1   476.9G Samsung SSD 980\n"
            "/dev/sda       931.5G WDC WD10EZEX\n"
        )
        self.tree_bytes = 1_500_000_000
        self.device_bytes = 10 * 1024**3

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        tool = argv[0]

        if self.fail_on is not None and tool == self.fail_on:
            return subprocess.CompletedProcess(argv, 1, stdout="", stderr=f"{tool}: boom")

        stdout = ""
        if tool == "lsblk":
            stdout = self.lsblk_output
        elif tool == "blkid":
            stdout = (ROOT_UUID if argv[2] == "UUID" else RECOVERY_PARTUUID) + "\n"
        elif tool == "genfstab":
            stdout = f"UUID={ROOT_UUID}\t/\text4\trw,relatime\t0 1\n"
        elif tool == "du":
            stdout = f"{self.tree_bytes}\t{argv[-1]}\n"
        elif tool == "blockdev":
            stdout = f"{self.device_bytes}\n"
        elif tool == "mount" and not Path(argv[-1]).is_dir():
            return subprocess.CompletedProcess(
                argv, 32, stdout="", stderr=f"mount: {argv[-1]}: mount point does not exist."
            )
        elif tool == "mkdir":
            Path(argv[-1]).mkdir(parents=True, exist_ok=True)
        elif tool == "pacstrap":
            boot = Path(argv[2]) / "boot"
            boot.mkdir(parents=True, exist_ok=True)
            (boot / "vmlinuz-linux").write_bytes(b"kernel")
            (boot / "initramfs-linux.img").write_bytes(b"initramfs")

        return subprocess.CompletedProcess(argv, 0, stdout=stdout, stderr="")

    def commands(self, tool: str) -> List[List[str]]:
        return [c for c in self.calls if c[0] == tool]

    def tools(self) -> List[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_tools(monkeypatch) -> FakeTools:
    tools = FakeTools()
    monkeypatch.setattr("arch_oem_installer.lib.command.subprocess.run", tools)
    monkeypatch.setattr("arch_oem_installer.lib.storage.time.sleep", lambda _s: None)
    return tools


@pytest.fixture
def target_paths(tmp_path) -> Dict[str, Path]:
    efivars = tmp_path / "efivars"
    efivars.mkdir()
    return {
        "efivars": efivars,
        "mnt": tmp_path / "mnt",
        "work": tmp_path / "recovery_build",
        "state": tmp_path / "state.json",
        "log": tmp_path / "installer.log",
    }


@pytest.fixture
def answers():
    """Build an ``ask`` callable that replays canned operator answers."""

    def _make(*replies: str):
        pending = list(replies)
        prompts: List[str] = []

        def ask(prompt: str) -> str:
            prompts.append(prompt)
            return pending.pop(0)

        ask.prompts = prompts
        return ask

    return _make
