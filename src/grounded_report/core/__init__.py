from __future__ import annotations

from grounded_report.core import config, protocols, types

__all__ = [
    "config",
    "protocols",
    "types",
]
