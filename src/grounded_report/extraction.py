from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence

from grounded_report.chunking import Chunk
from grounded_report.errors import PipelineCancelled
from grounded_report.model import GenerationOptions, LLMRequest
from grounded_report.parsing import parse_fact_blocks
from grounded_report.prompts import render_fact_extraction_prompt
from grounded_report.report_types import Fact
from grounded_report.retry import RetryingGenerator

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTION_OPTIONS = GenerationOptions(max_tokens=300, temperature=0.3)


class FactExtractor:
    def __init__(
        self,
        generator: RetryingGenerator,
        options: GenerationOptions = DEFAULT_EXTRACTION_OPTIONS,
    ) -> None:
        self._generator = generator
        self._options = options

    def extract(self, chunk: Chunk | str) -> List[Fact]:
        text = chunk.text if isinstance(chunk, Chunk) else chunk
        prompt = render_fact_extraction_prompt(text)
        response = self._generator.generate(
            LLMRequest(task="fact_extraction", prompt=prompt, options=self._options)
        )
        logger.debug(
            f"[Extract] Raw output:\n{response[:500]}{'...' if len(response) > 500 else ''}"
        )
        return parse_fact_blocks(response)

    def extract_all(
        self,
        chunks: Sequence[Chunk],
        max_workers: int = 1,
        should_cancel: Callable[[], bool] | None = None,
    ) -> List[Fact]:
        """Extract facts from every chunk, keeping source chunk order.

        A chunk whose extraction fails contributes no facts; the remaining
        chunks are still processed.
        """
        if max_workers > 1 and len(chunks) > 1:
            per_chunk = self._extract_parallel(chunks, max_workers, should_cancel)
        else:
            per_chunk = self._extract_sequential(chunks, should_cancel)

        all_facts: List[Fact] = []
        for facts in per_chunk:
            all_facts.extend(facts)
        logger.info(f"[Extract] Total facts extracted: {len(all_facts)} from {len(chunks)} chunks")
        return all_facts

    def _extract_one(self, index: int, total: int, chunk: Chunk) -> List[Fact]:
        logger.info(f"[Extract] Processing chunk {index + 1}/{total}, length={len(chunk)}")
        try:
            facts = self.extract(chunk)
        except Exception as exc:
            logger.error(f"[Extract] Failed to process chunk {index + 1}/{total}: {exc}")
            return []
        logger.info(f"[Extract] Chunk {index + 1}/{total}: {len(facts)} facts")
        return facts

    def _extract_sequential(
        self,
        chunks: Sequence[Chunk],
        should_cancel: Callable[[], bool] | None,
    ) -> List[List[Fact]]:
        results: List[List[Fact]] = []
        for index, chunk in enumerate(chunks):
            if should_cancel is not None and should_cancel():
                raise PipelineCancelled(f"cancelled before chunk {index + 1}/{len(chunks)}")
            results.append(self._extract_one(index, len(chunks), chunk))
        return results

    def _extract_parallel(
        self,
        chunks: Sequence[Chunk],
        max_workers: int,
        should_cancel: Callable[[], bool] | None,
    ) -> List[List[Fact]]:
        total = len(chunks)
        with ThreadPoolExecutor(max_workers=min(max_workers, total)) as pool:
            futures = [
                pool.submit(self._extract_one, index, total, chunk)
                for index, chunk in enumerate(chunks)
            ]
            results: List[List[Fact]] = []
            # Collect in submission order so first-seen dedup stays stable.
            for index, future in enumerate(futures):
                if should_cancel is not None and should_cancel():
                    for pending in futures[index:]:
                        pending.cancel()
                    raise PipelineCancelled(f"cancelled during extraction at chunk {index + 1}/{total}")
                results.append(future.result())
        return results


__all__ = [
    "DEFAULT_EXTRACTION_OPTIONS",
    "FactExtractor",
]
