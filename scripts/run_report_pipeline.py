from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


logger = logging.getLogger(__name__)


def _ensure_src_on_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_path = repo_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_ensure_src_on_path()

from grounded_report.assembly import segment_document
from grounded_report.backends.openai import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    OpenAIBackendConfig,
    OpenAILLMModel,
)
from grounded_report.errors import ReportSynthesisError
from grounded_report.pipelines import PipelineConfig, ReportPipeline
from grounded_report.profiles import DEFAULT_SCRIPT, load_profiles
from grounded_report.report_types import PipelineStage, ProgressEvent
from grounded_report.retry import RetryPolicy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a fact-grounded multi-section report from reference material."
    )
    parser.add_argument("--instruction", type=str, default="참고자료를 활용해서 리포트 초안을 작성해줘")
    parser.add_argument(
        "--reference-path",
        type=Path,
        required=True,
        help="Path to a UTF-8 text file holding the reference material.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional output path. If omitted, prints the report to stdout.",
    )
    parser.add_argument("--model", type=str, default=None)
    parser.add_argument("--base-url", type=str, default=None)
    parser.add_argument(
        "--target-script",
        type=str,
        default=DEFAULT_SCRIPT,
        choices=sorted(load_profiles()),
    )
    parser.add_argument("--max-retries", type=int, default=2)
    parser.add_argument("--retry-delay", type=float, default=1.0)
    parser.add_argument("--extraction-workers", type=int, default=1)
    parser.add_argument(
        "--force",
        action="store_true",
        help="Run the multi-stage pipeline even when the activation gate says no.",
    )
    parser.add_argument(
        "--segments",
        action="store_true",
        help="Print the report as insertion segments separated by blank lines.",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _log_progress(event: ProgressEvent) -> None:
    logger.info(f"[{event.stage.value}] {event.progress:.0f}% {event.message}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    reference_text = args.reference_path.read_text(encoding="utf-8")
    model = OpenAILLMModel(
        config=OpenAIBackendConfig(
            base_url=args.base_url or DEFAULT_BASE_URL,
            model=args.model or DEFAULT_MODEL,
        )
    )
    pipeline = ReportPipeline(
        model=model,
        config=PipelineConfig(
            target_script=args.target_script,
            extraction_workers=args.extraction_workers,
        ),
        retry_policy=RetryPolicy(max_retries=args.max_retries, delay_seconds=args.retry_delay),
    )

    if not args.force and not pipeline.should_activate(args.instruction, reference_text):
        _log_progress(
            ProgressEvent(
                stage=PipelineStage.GATED,
                message="Activation gate rejected this request; use single-pass generation or pass --force.",
                progress=0.0,
            )
        )
        return 2

    try:
        report = pipeline.generate_report(args.instruction, reference_text, on_progress=_log_progress)
    except ReportSynthesisError as exc:
        logger.error(f"Report generation failed: {exc}")
        return 1

    output = "\n\n".join(segment_document(report)) if args.segments else report
    if args.output is None:
        print(output)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(output, encoding="utf-8")
    logger.info(f"Written output to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
