from __future__ import annotations

"""Unified protocol exports for public consumption.

Protocols stay owned by their domain modules; this is only an import surface.
"""

from grounded_report.assembly import DocumentSink
from grounded_report.model import LLMModel, StreamingLLMModel

__all__ = [
    "LLMModel",
    "StreamingLLMModel",
    "DocumentSink",
]
