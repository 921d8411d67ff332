from __future__ import annotations

"""Unified public API for fact-grounded report generation."""

from grounded_report.assembly import DocumentSink, assemble, deliver, segment_document
from grounded_report.backends import OpenAIBackendConfig, OpenAILLMModel
from grounded_report.chunking import Chunk, chunk_text, split_into_structural_units
from grounded_report.errors import (
    ExtractionEmptyError,
    GenerationError,
    ParseWarning,
    PipelineCancelled,
    ReportSynthesisError,
)
from grounded_report.extraction import FactExtractor
from grounded_report.matching import RelevanceMatcher, extract_keywords
from grounded_report.model import (
    GenerationOptions,
    LLMModel,
    LLMRequest,
    LLMTask,
    StreamingLLMModel,
)
from grounded_report.parsing import clean_section_content, parse_fact_blocks, parse_outline_lines
from grounded_report.pipelines import PipelineConfig, ReportPipeline
from grounded_report.planning import OutlinePlanner, build_title
from grounded_report.profiles import ScriptProfile, contains_script, get_profile, load_profiles
from grounded_report.ranking import (
    RankingConfig,
    deduplicate_facts,
    rank_facts,
    score_fact,
    subject_similarity,
)
from grounded_report.report_types import (
    Fact,
    Outline,
    PipelineStage,
    ProgressEvent,
    ReportResult,
    Section,
)
from grounded_report.retry import RetryingGenerator, RetryPolicy
from grounded_report.writing import SectionWriter
from grounded_report.core import config, protocols, types

__version__ = "0.1.0"

__all__ = [
    "config",
    "protocols",
    "types",
    "ReportPipeline",
    "PipelineConfig",
    "RetryingGenerator",
    "RetryPolicy",
    "FactExtractor",
    "OutlinePlanner",
    "RelevanceMatcher",
    "SectionWriter",
    "RankingConfig",
    "ScriptProfile",
    "get_profile",
    "load_profiles",
    "contains_script",
    "Chunk",
    "chunk_text",
    "split_into_structural_units",
    "parse_fact_blocks",
    "parse_outline_lines",
    "clean_section_content",
    "deduplicate_facts",
    "rank_facts",
    "score_fact",
    "subject_similarity",
    "extract_keywords",
    "build_title",
    "assemble",
    "segment_document",
    "deliver",
    "DocumentSink",
    "Fact",
    "Outline",
    "Section",
    "PipelineStage",
    "ProgressEvent",
    "ReportResult",
    "GenerationOptions",
    "LLMModel",
    "LLMRequest",
    "LLMTask",
    "StreamingLLMModel",
    "OpenAIBackendConfig",
    "OpenAILLMModel",
    "ReportSynthesisError",
    "GenerationError",
    "ExtractionEmptyError",
    "PipelineCancelled",
    "ParseWarning",
]
