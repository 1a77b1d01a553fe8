#!/usr/bin/env python3
"""
Compare two documents from the command line.

PDFs are read with PyMuPDF; any other file is read as UTF-8 text with pages
separated by form feeds. Prints a summary and optionally writes the full
outcome as JSON.

Exit codes: 0 result, 1 extraction failure, 2 OCR required, 3 empty input.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add repository root to path so imports work when running as a script
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from comparison.models import ComparisonResult, EmptyInputSignal, OCRRequiredSignal
from export.json_exporter import export_json
from extraction.pdf_text import ExtractionError
from pipeline import EngineConfig, compare_files
from utils.logging import configure_logging, logger

EXIT_OK = 0
EXIT_EXTRACTION_FAILED = 1
EXIT_OCR_REQUIRED = 2
EXIT_EMPTY_INPUT = 3


def _log_result(result: ComparisonResult) -> None:
    logger.info("=" * 60)
    logger.info("Similarity: overall %d%% (jaccard %d%%, levenshtein %s)",
                result.similarity.overall,
                result.similarity.jaccard,
                "skipped" if result.similarity.levenshtein is None else f"{result.similarity.levenshtein}%")
    logger.info("Words: +%d / -%d / =%d (%d%% changed)",
                result.changes.added,
                result.changes.removed,
                result.changes.unchanged,
                result.changes.change_percentage)
    logger.info("Common words: %d (unique left %d, unique right %d)",
                result.common_word_count,
                result.unique_words_left,
                result.unique_words_right)
    for phrase in result.common_phrases:
        logger.info("  common phrase: %s", phrase)
    logger.info("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        prog="run_comparison.py",
        description="Compare the text of two documents and report similarity and changes.",
    )
    parser.add_argument("left", help="Original document (.pdf or form-feed separated text)")
    parser.add_argument("right", help="Revised document (.pdf or form-feed separated text)")
    parser.add_argument("--json", dest="json_path", default=None, help="Write the full outcome to this JSON file")
    parser.add_argument("--no-parallel", action="store_true", help="Classify the documents sequentially")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    config = EngineConfig(parallel_classification=False if args.no_parallel else None)
    try:
        outcome = compare_files(args.left, args.right, config=config)
    except ExtractionError as exc:
        logger.error("Extraction failed: %s", exc)
        return EXIT_EXTRACTION_FAILED

    if args.json_path:
        export_json(outcome, args.json_path)

    if isinstance(outcome, OCRRequiredSignal):
        logger.warning("OCR required (left image-based=%s, right image-based=%s)",
                       outcome.left_is_image_based, outcome.right_is_image_based)
        return EXIT_OCR_REQUIRED
    if isinstance(outcome, EmptyInputSignal):
        logger.warning("Nothing to compare: %s", outcome.reason)
        return EXIT_EMPTY_INPUT

    _log_result(outcome)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
