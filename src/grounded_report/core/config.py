from __future__ import annotations

"""Unified config exports for public consumption."""

from grounded_report.backends import OpenAIBackendConfig
from grounded_report.pipelines import PipelineConfig
from grounded_report.profiles import ScriptProfile, get_profile
from grounded_report.ranking import RankingConfig
from grounded_report.retry import RetryPolicy

__all__ = [
    "PipelineConfig",
    "RankingConfig",
    "RetryPolicy",
    "ScriptProfile",
    "get_profile",
    "OpenAIBackendConfig",
]
