from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List

from grounded_report.assembly import assemble
from grounded_report.chunking import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, chunk_text
from grounded_report.errors import ExtractionEmptyError, PipelineCancelled
from grounded_report.extraction import FactExtractor
from grounded_report.matching import RelevanceMatcher
from grounded_report.model import LLMModel
from grounded_report.planning import OutlinePlanner
from grounded_report.profiles import DEFAULT_SCRIPT, ScriptProfile, get_profile
from grounded_report.ranking import RankingConfig, rank_facts
from grounded_report.report_types import (
    PipelineStage,
    ProgressEvent,
    ReportResult,
    Section,
)
from grounded_report.retry import RetryingGenerator, RetryPolicy
from grounded_report.writing import SectionWriter

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]

EXTRACTING_PROGRESS = 10.0
PLANNING_PROGRESS = 30.0
WRITING_START_PROGRESS = 40.0
WRITING_SPAN_PROGRESS = 50.0
ASSEMBLING_PROGRESS = 90.0
COMPLETE_PROGRESS = 100.0


@dataclass(frozen=True)
class PipelineConfig:
    target_script: str = DEFAULT_SCRIPT
    min_reference_chars: int = 800
    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP
    extraction_workers: int = 1
    section_top_k: int = 4
    ranking: RankingConfig = field(default_factory=RankingConfig)

    def __post_init__(self) -> None:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        if self.extraction_workers <= 0:
            raise ValueError("extraction_workers must be positive")


class _ProgressReporter:
    """Emits progress events and remembers the last stage and value."""

    def __init__(self, callback: ProgressCallback | None) -> None:
        self._callback = callback
        self.stage = PipelineStage.IDLE
        self.progress = 0.0

    def emit(self, stage: PipelineStage, message: str, progress: float | None = None) -> None:
        self.stage = stage
        if progress is not None:
            self.progress = max(self.progress, progress)
        event = ProgressEvent(stage=stage, message=message, progress=self.progress)
        logger.info(f"[Pipeline] [{stage.value}] {self.progress:.0f}% {message}")
        if self._callback is None:
            return
        try:
            self._callback(event)
        except Exception as exc:
            logger.warning(f"[Pipeline] Progress callback failed: {exc}")


class ReportPipeline:
    """Multi-stage, fact-grounded report generation.

    Runs are independent: all intermediate facts, outlines and sections live
    on the call stack, so one instance may serve concurrent callers.
    """

    def __init__(
        self,
        model: LLMModel | None = None,
        config: PipelineConfig | None = None,
        retry_policy: RetryPolicy | None = None,
        profile: ScriptProfile | None = None,
        generator: RetryingGenerator | None = None,
    ) -> None:
        self._config = config or PipelineConfig()
        self._profile = profile or get_profile(self._config.target_script)
        if generator is None:
            if model is None:
                raise ValueError("either model or generator is required")
            generator = RetryingGenerator(model, policy=retry_policy)
        self._generator = generator
        self._extractor = FactExtractor(self._generator)
        self._planner = OutlinePlanner(self._generator, self._profile)
        self._matcher = RelevanceMatcher(self._profile, top_k=self._config.section_top_k)
        self._writer = SectionWriter(self._generator, self._profile)

    @property
    def profile(self) -> ScriptProfile:
        return self._profile

    def should_activate(self, instruction: str, reference_text: str) -> bool:
        in_target_script = self._profile.matches(instruction)
        has_report_intent = self._profile.has_report_intent(instruction)
        has_large_reference = len(reference_text) > self._config.min_reference_chars
        has_reference = bool(reference_text.strip())
        should_use = in_target_script and has_report_intent and has_large_reference and has_reference
        logger.info(
            "[Pipeline] Activation decision: "
            f"script={in_target_script}, report_intent={has_report_intent}, "
            f"large_reference={has_large_reference}, has_reference={has_reference}, "
            f"activate={should_use}"
        )
        return should_use

    def generate_report(
        self,
        instruction: str,
        reference_text: str,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> str:
        return self.run(
            instruction=instruction,
            reference_text=reference_text,
            on_progress=on_progress,
            cancel_event=cancel_event,
        ).document

    def run(
        self,
        instruction: str,
        reference_text: str,
        on_progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ReportResult:
        reporter = _ProgressReporter(on_progress)
        logger.info(
            f"[Pipeline] Starting report generation: instruction_len={len(instruction)}, "
            f"reference_len={len(reference_text)}"
        )
        try:
            return self._run_stages(instruction, reference_text, reporter, cancel_event)
        except PipelineCancelled as exc:
            reporter.emit(PipelineStage.CANCELLED, f"Report generation cancelled: {exc}")
            raise
        except Exception as exc:
            failed_stage = reporter.stage
            logger.error(f"[Pipeline] Stage '{failed_stage.value}' failed: {exc}")
            reporter.emit(
                PipelineStage.ERROR,
                f"Report generation failed during {failed_stage.value}: {exc}",
            )
            raise

    def _run_stages(
        self,
        instruction: str,
        reference_text: str,
        reporter: _ProgressReporter,
        cancel_event: threading.Event | None,
    ) -> ReportResult:
        def should_cancel() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        def check_cancelled(where: str) -> None:
            if should_cancel():
                raise PipelineCancelled(f"cancelled before {where}")

        # Stage 1: chunk and extract facts
        check_cancelled("extraction")
        reporter.emit(
            PipelineStage.EXTRACTING,
            "Extracting key facts from the reference material...",
            EXTRACTING_PROGRESS,
        )
        chunks = chunk_text(
            reference_text,
            max_size=self._config.chunk_size,
            overlap=self._config.chunk_overlap,
            terminators=self._profile.sentence_terminators,
        )
        logger.info(f"[Pipeline] Split reference into {len(chunks)} chunks")
        extracted = self._extractor.extract_all(
            chunks,
            max_workers=self._config.extraction_workers,
            should_cancel=should_cancel,
        )
        facts = rank_facts(extracted, self._config.ranking)
        if not facts:
            raise ExtractionEmptyError("no usable facts could be extracted from the reference material")

        # Stage 2: plan the outline
        check_cancelled("planning")
        reporter.emit(PipelineStage.PLANNING, "Planning the report structure...", PLANNING_PROGRESS)
        outline = self._planner.plan(facts, instruction)

        # Stage 3: write each section in outline order
        sections: List[Section] = []
        total = len(outline.sections)
        for index, section_title in enumerate(outline.sections):
            check_cancelled(f"section {index + 1}/{total}")
            reporter.emit(
                PipelineStage.WRITING,
                f'Writing section "{section_title}" ({index + 1}/{total})...',
                WRITING_START_PROGRESS + (index / total) * WRITING_SPAN_PROGRESS,
            )
            relevant = self._matcher.match(section_title, facts)
            content = self._writer.write(section_title, relevant)
            sections.append(Section(title=section_title, content=content, facts=tuple(relevant)))

        # Stage 4: assemble
        check_cancelled("assembly")
        reporter.emit(PipelineStage.ASSEMBLING, "Assembling the final report...", ASSEMBLING_PROGRESS)
        document = assemble(outline.title, sections, self._profile)

        reporter.emit(PipelineStage.COMPLETE, "Report generation complete.", COMPLETE_PROGRESS)
        logger.info(f"[Pipeline] Final report length: {len(document)} chars")
        return ReportResult(
            document=document,
            outline=outline,
            sections=tuple(sections),
            facts=tuple(facts),
        )


__all__ = [
    "PipelineConfig",
    "ProgressCallback",
    "ReportPipeline",
]
