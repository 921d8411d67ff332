from __future__ import annotations

"""Unified type exports for public consumption.

Type ownership stays in domain modules (`model.py`, `report_types.py`,
`chunking.py`, `errors.py`).
"""

from grounded_report.chunking import Chunk
from grounded_report.errors import (
    ExtractionEmptyError,
    GenerationError,
    ParseWarning,
    PipelineCancelled,
    ReportSynthesisError,
)
from grounded_report.model import GenerationOptions, LLMRequest, LLMTask
from grounded_report.report_types import (
    Fact,
    Outline,
    PipelineStage,
    ProgressEvent,
    ReportResult,
    Section,
)

__all__ = [
    "LLMTask",
    "LLMRequest",
    "GenerationOptions",
    "Chunk",
    "Fact",
    "Outline",
    "Section",
    "PipelineStage",
    "ProgressEvent",
    "ReportResult",
    "ReportSynthesisError",
    "GenerationError",
    "ExtractionEmptyError",
    "PipelineCancelled",
    "ParseWarning",
]
