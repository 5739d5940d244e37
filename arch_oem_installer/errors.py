from __future__ import annotations


class InstallerAbort(RuntimeError):
    """Raised when a precondition fails before any disk has been touched."""
