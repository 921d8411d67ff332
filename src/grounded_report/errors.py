from __future__ import annotations


class ReportSynthesisError(Exception):
    """Base class for failures raised by the report pipeline."""


class GenerationError(ReportSynthesisError):
    """The text-generation service failed, possibly after retries."""


class ExtractionEmptyError(ReportSynthesisError):
    """No facts survived extraction across all chunks."""


class PipelineCancelled(ReportSynthesisError):
    """The run was stopped through its cancellation signal."""


class ParseWarning(UserWarning):
    """A malformed fact block or outline line was dropped."""


__all__ = [
    "ReportSynthesisError",
    "GenerationError",
    "ExtractionEmptyError",
    "PipelineCancelled",
    "ParseWarning",
]
