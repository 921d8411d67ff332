from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Protocol


LLMTask = Literal[
    "fact_extraction",
    "outline_planning",
    "section_writing",
    "single_pass",
]


@dataclass(frozen=True)
class GenerationOptions:
    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    stop_sequences: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LLMRequest:
    task: LLMTask
    prompt: str
    options: GenerationOptions = field(default_factory=GenerationOptions)


class LLMModel(Protocol):
    def generate(self, request: LLMRequest) -> str:
        ...


class StreamingLLMModel(Protocol):
    def stream_generate(
        self,
        request: LLMRequest,
        callback: Callable[[str], None],
    ) -> None:
        ...
