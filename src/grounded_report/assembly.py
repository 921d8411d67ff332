from __future__ import annotations

import re
from typing import List, Protocol, Sequence

from grounded_report.chunking import split_into_structural_units
from grounded_report.profiles import ScriptProfile
from grounded_report.report_types import Section

_HEADING_BOUNDARY = re.compile(r"(?=^#)", re.MULTILINE)


class DocumentSink(Protocol):
    def append(self, segment: str) -> None:
        ...


def assemble(title: str, sections: Sequence[Section], profile: ScriptProfile) -> str:
    parts = [f"# {title}\n\n"]
    for section in sections:
        parts.append(f"## {section.title}\n\n{section.content}\n\n")

    fact_count = sum(len(section.facts) for section in sections)
    parts.append(f"---\n{profile.footer_text(len(sections), fact_count)}")
    return "".join(parts)


def segment_document(document: str) -> List[str]:
    """Split at heading and blank-line boundaries for block-wise insertion."""
    segments: List[str] = []
    for part in _HEADING_BOUNDARY.split(document):
        segments.extend(split_into_structural_units(part))
    return segments


def deliver(document: str, sink: DocumentSink) -> int:
    segments = segment_document(document)
    for segment in segments:
        sink.append(segment)
    return len(segments)


__all__ = [
    "DocumentSink",
    "assemble",
    "segment_document",
    "deliver",
]
