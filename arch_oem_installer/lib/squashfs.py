from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)


def mksquashfs(source_dir: str, dest: str, *, dry_run: bool = False) -> None:
    """Compress ``source_dir`` into a squashfs image at ``dest``.

    ``dest`` may be a raw block device; the partition then *is* the image.
    """

    run_cmd(
        [
            "mksquashfs",
            source_dir,
            dest,
            "-comp",
            "zstd",
            "-root-owned",
            "-noappend",
            "-wildcards",
        ],
        dry_run=dry_run,
    )


def tree_size_bytes(path: str, *, dry_run: bool = False) -> int:
    r = run_cmd(["du", "-sb", path], dry_run=dry_run)
    out = (r.stdout or "").split()
    return int(out[0]) if out else 0


def device_size_bytes(dev: str, *, dry_run: bool = False) -> int:
    r = run_cmd(["blockdev", "--getsize64", dev], dry_run=dry_run)
    out = (r.stdout or "").strip()
    return int(out) if out else 0
