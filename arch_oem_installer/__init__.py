"""Arch Linux OEM-style installer.

Lays out two disks for an Arch install that carries its own read-only
recovery system:

- main disk: ESP, squashfs recovery image, /var, /
- home disk: /home

The run is a forward-only list of steps; any failure stops it.
"""

__all__ = []
