from __future__ import annotations

from grounded_report.backends.openai import OpenAIBackendConfig, OpenAILLMModel

__all__ = [
    "OpenAIBackendConfig",
    "OpenAILLMModel",
]
