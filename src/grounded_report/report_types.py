from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Fact:
    subject: str
    action: str
    details: str
    relevance_score: float | None = None

    def with_score(self, score: float) -> "Fact":
        return replace(self, relevance_score=score)

    def text(self) -> str:
        return f"{self.subject} {self.action} {self.details}"

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Fact":
        raw_score = payload.get("relevance_score")
        return cls(
            subject=str(payload.get("subject", "")).strip(),
            action=str(payload.get("action", "")).strip(),
            details=str(payload.get("details", "")).strip(),
            relevance_score=float(raw_score) if raw_score is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "subject": self.subject,
            "action": self.action,
            "details": self.details,
        }
        if self.relevance_score is not None:
            payload["relevance_score"] = self.relevance_score
        return payload


@dataclass(frozen=True)
class Outline:
    title: str
    sections: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "sections": list(self.sections)}


@dataclass(frozen=True)
class Section:
    title: str
    content: str
    facts: tuple[Fact, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "facts": [fact.to_dict() for fact in self.facts],
        }


class PipelineStage(str, Enum):
    IDLE = "idle"
    GATED = "gated"
    EXTRACTING = "extracting"
    PLANNING = "planning"
    WRITING = "writing"
    ASSEMBLING = "assembling"
    COMPLETE = "complete"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStage.COMPLETE, PipelineStage.ERROR, PipelineStage.CANCELLED)


@dataclass(frozen=True)
class ProgressEvent:
    stage: PipelineStage
    message: str
    progress: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage.value,
            "message": self.message,
            "progress": self.progress,
        }


@dataclass(frozen=True)
class ReportResult:
    document: str
    outline: Outline
    sections: tuple[Section, ...]
    facts: tuple[Fact, ...]

    @property
    def fact_count(self) -> int:
        return sum(len(section.facts) for section in self.sections)


__all__ = [
    "Fact",
    "Outline",
    "Section",
    "PipelineStage",
    "ProgressEvent",
    "ReportResult",
]
