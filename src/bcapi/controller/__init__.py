"""Internal controller exports for bcapi."""

from __future__ import annotations

from .transport import HttpTransport

__all__ = ["HttpTransport"]
