from __future__ import annotations

from grounded_report.pipelines.report import PipelineConfig, ProgressCallback, ReportPipeline

__all__ = [
    "PipelineConfig",
    "ProgressCallback",
    "ReportPipeline",
]
