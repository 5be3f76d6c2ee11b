#!/usr/bin/env python3
"""
Resume Scorer CLI

Scores a resume file from the command line with the same evaluator the HTTP
API uses, or starts the API server.

Usage:
    python cli.py score resume.pdf
    python cli.py score resume.pdf --variant extended --log scored_resumes.jsonl
    python cli.py serve
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from config import load_settings
from errors import ConfigurationError, EvaluationError, ExtractionError
from evaluator import ResumeEvaluator
from model_client import GeminiModelClient
from models.evaluation_model import SchemaVariant
from result_log import ResultLog

logger = logging.getLogger(__name__)


def score_command(args: argparse.Namespace) -> int:
    settings = load_settings()
    variant = SchemaVariant(args.variant) if args.variant else settings.schema_variant
    evaluator = ResumeEvaluator(
        GeminiModelClient(api_key=settings.api_key, model_name=settings.model_name),
        schema_variant=variant,
        timeout_seconds=settings.model_timeout_seconds,
        max_concurrent_calls=1,
    )

    try:
        result = asyncio.run(evaluator.score_file(args.file))
    except ExtractionError as e:
        logger.error(f"❌ Could not read resume: {e}")
        return 1
    except EvaluationError as e:
        logger.error(f"❌ Failed to score resume ({e.kind.value}): {e}")
        if e.raw_output is not None:
            logger.error(f"Raw model output:\n{e.raw_output}")
        return 1

    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))

    log_path = args.log or settings.result_log_path
    if log_path:
        ResultLog(log_path).append(result, filename=args.file)
    return 0


def serve_command(args: argparse.Namespace) -> int:
    from main import run

    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score resumes with a language model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser("score", help="Score a single resume file")
    score.add_argument("file", help="Path to a PDF, DOCX or text resume")
    score.add_argument(
        "--variant",
        choices=[v.value for v in SchemaVariant],
        help="Response schema to request (defaults to SCHEMA_VARIANT)",
    )
    score.add_argument("--log", help="Append the result to this NDJSON file")
    score.set_defaults(func=score_command)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.set_defaults(func=serve_command)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
