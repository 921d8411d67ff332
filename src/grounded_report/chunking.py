from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List

DEFAULT_CHUNK_SIZE = 500
DEFAULT_CHUNK_OVERLAP = 100
DEFAULT_TERMINATORS: tuple[str, ...] = (".", "!", "?", "。")
MIN_BREAK_RATIO = 0.7


@dataclass(frozen=True)
class Chunk:
    text: str
    start: int
    end: int

    def __len__(self) -> int:
        return len(self.text)


def split_into_structural_units(text: str) -> List[str]:
    """Split on blank lines, dropping empty paragraphs."""
    stripped = text.strip()
    if not stripped:
        return []
    units = [part.strip() for part in re.split(r"\n\s*\n", stripped) if part.strip()]
    return units


def _find_break_point(window: str, terminators: Iterable[str]) -> int:
    """Return the index just past the last terminator or line break, or -1."""
    best = -1
    for terminator in (*terminators, "\n"):
        index = window.rfind(terminator)
        if index >= 0:
            best = max(best, index + len(terminator))
    return best


def chunk_text(
    text: str,
    max_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
    terminators: Iterable[str] = DEFAULT_TERMINATORS,
    min_break_ratio: float = MIN_BREAK_RATIO,
) -> List[Chunk]:
    """
    Split text into overlapping windows that prefer sentence boundaries.

    Each window holds at most ``max_size`` characters. When the last sentence
    terminator or line break sits at least ``min_break_ratio`` into the window
    the chunk ends right after it; otherwise the chunk ends at the hard
    boundary. The next window starts ``overlap`` characters before that cut.

    Args:
        text: source text
        max_size: maximum characters per chunk
        overlap: characters shared with the previous chunk, below max_size
        terminators: sentence-ending punctuation
        min_break_ratio: earliest position of a soft cut, as a window fraction
    """
    if max_size <= 0:
        raise ValueError("max_size must be positive")
    if overlap < 0:
        raise ValueError("overlap must not be negative")
    if overlap >= max_size:
        raise ValueError("overlap must be smaller than max_size")

    terminator_list = tuple(terminators)
    length = len(text)
    chunks: List[Chunk] = []
    start = 0

    while start < length:
        end = min(start + max_size, length)
        if end >= length:
            chunks.append(Chunk(text=text[start:end], start=start, end=end))
            break

        cut = end
        break_point = _find_break_point(text[start:end], terminator_list)
        # break_point - 1 is the terminator's position inside the window
        if break_point - 1 >= max_size * min_break_ratio and break_point > overlap:
            cut = start + break_point

        chunks.append(Chunk(text=text[start:cut], start=start, end=cut))
        start = cut - overlap

    return [chunk for chunk in chunks if chunk.text.strip()]


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_CHUNK_OVERLAP",
    "DEFAULT_TERMINATORS",
    "Chunk",
    "chunk_text",
    "split_into_structural_units",
]
