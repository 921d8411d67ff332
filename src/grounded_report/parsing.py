from __future__ import annotations

"""Parsers for the plain-text formats the model is asked to produce.

Model output is untrusted text. Every parser here keeps what it can read and
drops the rest with a ``ParseWarning``; none of them raise on bad input.
"""

import logging
import re
import warnings
from typing import List

from grounded_report.errors import ParseWarning
from grounded_report.profiles import ScriptProfile
from grounded_report.report_types import Fact

logger = logging.getLogger(__name__)

_FACT_LABEL_PATTERN = re.compile(r"FACT\s*\d+\s*:", re.IGNORECASE)
_SUBJECT_PATTERN = re.compile(r"Subject[ \t]*:[ \t]*(\S.*)", re.IGNORECASE)
_ACTION_PATTERN = re.compile(r"Action[ \t]*:[ \t]*(\S.*)", re.IGNORECASE)
_DETAILS_PATTERN = re.compile(r"Details[ \t]*:[ \t]*(\S.*)", re.IGNORECASE)

_LIST_MARKER_PATTERN = re.compile(r"^(?:\d+\s*[.)]\s*|[-•*#]+\s*)")
_SECTION_LABEL_PATTERN = re.compile(r"^(?:Section:|섹션:)", re.IGNORECASE)
_CONTENT_LABEL_PATTERN = re.compile(r"^(?:Content:|내용:)", re.IGNORECASE)
_LEADING_NUMBER_PATTERN = re.compile(r"^\d+\.\s*")


def _warn(message: str) -> None:
    logger.warning(f"[Parse] {message}")
    warnings.warn(message, ParseWarning, stacklevel=3)


def _clean_field(value: str) -> str:
    return value.strip().strip("*").strip()


def parse_fact_blocks(response: str) -> List[Fact]:
    """Parse ``FACT n:`` blocks carrying Subject/Action/Details lines.

    Text before the first label is ignored. A block missing any of the three
    fields is dropped as a whole rather than kept as a partial fact.
    """
    facts: List[Fact] = []
    blocks = _FACT_LABEL_PATTERN.split(response)[1:]

    for index, block in enumerate(blocks):
        subject_match = _SUBJECT_PATTERN.search(block)
        action_match = _ACTION_PATTERN.search(block)
        details_match = _DETAILS_PATTERN.search(block)

        if not (subject_match and action_match and details_match):
            missing = [
                name
                for name, match in (
                    ("Subject", subject_match),
                    ("Action", action_match),
                    ("Details", details_match),
                )
                if not match
            ]
            _warn(f"dropping fact block {index + 1}: missing {', '.join(missing)}")
            continue

        subject = _clean_field(subject_match.group(1))
        action = _clean_field(action_match.group(1))
        details = _clean_field(details_match.group(1))
        if not subject:
            _warn(f"dropping fact block {index + 1}: empty subject")
            continue

        facts.append(Fact(subject=subject, action=action, details=details))

    return facts


def _is_example_line(line: str, profile: ScriptProfile) -> bool:
    return any(marker in line for marker in profile.example_markers)


def parse_outline_lines(response: str, profile: ScriptProfile) -> List[str]:
    """Keep response lines usable as section headings in the target script."""
    headings: List[str] = []
    for raw_line in response.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if _is_example_line(line, profile):
            continue
        if not profile.matches(line):
            _warn(f"dropping outline line outside {profile.name} script: {line[:80]}")
            continue
        heading = _LIST_MARKER_PATTERN.sub("", line).strip().strip("*").strip()
        if heading:
            headings.append(heading)
    return headings


def clean_section_content(content: str) -> str:
    cleaned = content.strip()
    cleaned = _SECTION_LABEL_PATTERN.sub("", cleaned)
    cleaned = _CONTENT_LABEL_PATTERN.sub("", cleaned.strip())
    cleaned = _LEADING_NUMBER_PATTERN.sub("", cleaned.strip())
    return cleaned.strip()


__all__ = [
    "parse_fact_blocks",
    "parse_outline_lines",
    "clean_section_content",
]
