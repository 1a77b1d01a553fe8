"""
Main orchestrator: compare the extracted text of two paginated documents.

Flow:
1. EXTRACTING - classify both documents' pages (concurrently when enabled)
2. OCR_REQUIRED - stop here if either document is image-based
3. COMPARING - diffs, similarity scores, change counts, common phrases
4. DONE - return an immutable ComparisonResult

Degenerate input (no pages or no usable text) produces an EmptyInputSignal
instead of a result.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from comparison.diff_engine import count_changes, diff_chars, diff_sentences, diff_words, truncate
from comparison.edit_distance import levenshtein_ratio
from comparison.models import (
    ComparisonOutcome,
    ComparisonResult,
    DocumentAnalysis,
    EmptyInputSignal,
    OCRRequiredSignal,
    SimilarityScores,
    StructuralChanges,
    outcome_kind,
)
from comparison.ngrams import common_ngrams
from comparison.set_similarity import build_word_set, jaccard, set_overlap
from comparison.tokenizer import tokenize_sentences, tokenize_words
from config.settings import settings
from extraction.page_classifier import classify_pages
from extraction.pdf_text import load_pages
from utils.logging import logger
from utils.performance import Timing, summarize_timings, track_time

ProgressCallback = Callable[[int, str], None]


class ComparisonState(Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    COMPARING = "comparing"
    OCR_REQUIRED = "ocr_required"
    DONE = "done"


@dataclass
class EngineConfig:
    """Per-engine overrides; ``None`` fields fall back to ``settings``."""

    min_page_text_chars: Optional[int] = None
    min_word_length: Optional[int] = None
    ngram_size: Optional[int] = None
    max_common_phrases: Optional[int] = None
    word_diff_limit: Optional[int] = None
    sentence_diff_limit: Optional[int] = None
    char_diff_limit: Optional[int] = None
    max_levenshtein_chars: Optional[int] = None
    significant_change_percent: Optional[float] = None
    parallel_classification: Optional[bool] = None
    num_workers: Optional[int] = None
    progress_callback: Optional[ProgressCallback] = field(default=None, repr=False)

    def resolve(self, name: str):
        value = getattr(self, name)
        if value is None:
            return getattr(settings, name)
        return value


class ComparisonEngine:
    """
    Document comparison engine.

    Usage:
        engine = ComparisonEngine()
        outcome = engine.compare(left_pages, right_pages, "v1.pdf", "v2.pdf")

        # Or step-by-step:
        left = engine.analyze(left_pages, "v1.pdf")
        right = engine.analyze(right_pages, "v2.pdf")
        outcome = engine.compare_analyses(left, right)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.state = ComparisonState.IDLE
        self.timings: List[Timing] = []

    def _transition(self, state: ComparisonState) -> None:
        logger.debug("Comparison state: %s -> %s", self.state.value, state.value)
        self.state = state

    def _progress(self, percent: float, task: str) -> None:
        callback = self.config.progress_callback
        if callback is not None:
            callback(int(min(100, max(0, percent))), task)

    def analyze(self, page_texts: Sequence[str], file_name: str = "") -> DocumentAnalysis:
        """Classify one document's pages."""
        with track_time("classify", self.timings, file_name=file_name):
            return classify_pages(
                page_texts,
                file_name,
                min_text_chars=self.config.min_page_text_chars,
            )

    def compare(
        self,
        left_pages: Sequence[str],
        right_pages: Sequence[str],
        left_name: str = "left",
        right_name: str = "right",
    ) -> ComparisonOutcome:
        """
        Classify both documents and compare them.

        Args:
            left_pages: Raw text per page of the left (original) document
            right_pages: Raw text per page of the right (revised) document
            left_name: Name reported for the left document
            right_name: Name reported for the right document

        Returns:
            ComparisonResult, OCRRequiredSignal or EmptyInputSignal
        """
        self.timings = []
        self._transition(ComparisonState.EXTRACTING)
        self._progress(0, "Classifying pages...")

        if self.config.resolve("parallel_classification"):
            workers = max(1, min(2, self.config.resolve("num_workers")))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="classify") as executor:
                left_future = executor.submit(self.analyze, left_pages, left_name)
                right_future = executor.submit(self.analyze, right_pages, right_name)
                left, right = left_future.result(), right_future.result()
        else:
            left = self.analyze(left_pages, left_name)
            right = self.analyze(right_pages, right_name)

        self._progress(50, "Pages classified")
        return self._compare_analyses(left, right)

    def compare_analyses(self, left: DocumentAnalysis, right: DocumentAnalysis) -> ComparisonOutcome:
        """Compare two already classified documents; timings start afresh."""
        self.timings = []
        return self._compare_analyses(left, right)

    def _compare_analyses(self, left: DocumentAnalysis, right: DocumentAnalysis) -> ComparisonOutcome:
        if left.total_pages == 0 or right.total_pages == 0:
            return self._empty(left, right, "document has no pages")

        if left.is_image_based or right.is_image_based:
            self._transition(ComparisonState.OCR_REQUIRED)
            logger.warning(
                "OCR required: left image-based=%s, right image-based=%s",
                left.is_image_based,
                right.is_image_based,
            )
            self._progress(100, "OCR required")
            return OCRRequiredSignal(
                left_is_image_based=left.is_image_based,
                right_is_image_based=right.is_image_based,
                left_analysis=left,
                right_analysis=right,
            )

        if not left.normalized_text or not right.normalized_text:
            return self._empty(left, right, "no extractable text after normalization")

        self._transition(ComparisonState.COMPARING)
        result = self._compare_texts(left, right)
        self._transition(ComparisonState.DONE)
        self._progress(100, "Comparison complete")

        summary = summarize_timings(self.timings)
        logger.info(
            "Comparison done: overall=%d%% (jaccard=%d, levenshtein=%s), +%d/-%d words, %.3fs",
            result.similarity.overall,
            result.similarity.jaccard,
            result.similarity.levenshtein,
            result.changes.added,
            result.changes.removed,
            sum(summary.values()),
        )
        return result

    def _empty(self, left: DocumentAnalysis, right: DocumentAnalysis, reason: str) -> EmptyInputSignal:
        self._transition(ComparisonState.DONE)
        logger.warning("Nothing to compare (%s): left=%s, right=%s", reason, left.file_name, right.file_name)
        self._progress(100, "Nothing to compare")
        return EmptyInputSignal(left_is_empty=left.is_empty, right_is_empty=right.is_empty, reason=reason)

    def _compare_texts(self, left: DocumentAnalysis, right: DocumentAnalysis) -> ComparisonResult:
        cfg = self.config
        left_text = left.normalized_text.lower()
        right_text = right.normalized_text.lower()

        self._progress(60, "Analyzing differences...")
        with track_time("char_diff", self.timings):
            char_diff = diff_chars(left_text, right_text)
        with track_time("word_diff", self.timings):
            word_diff = diff_words(left_text, right_text)
        with track_time("sentence_diff", self.timings):
            sentence_diff = diff_sentences(tokenize_sentences(left_text), tokenize_sentences(right_text))

        self._progress(80, "Calculating similarity...")
        left_tokens = tokenize_words(left_text)
        right_tokens = tokenize_words(right_text)

        min_word_length = cfg.resolve("min_word_length")
        left_words = build_word_set(left_tokens, min_word_length)
        right_words = build_word_set(right_tokens, min_word_length)
        jaccard_score = jaccard(left_words, right_words)
        overlap = set_overlap(left_words, right_words)

        with track_time("levenshtein", self.timings):
            levenshtein_score = self._levenshtein_score(left_text, right_text)

        if levenshtein_score is None:
            overall = round(jaccard_score)
        else:
            overall = round((jaccard_score + levenshtein_score) / 2)

        changes = count_changes(word_diff, cfg.resolve("significant_change_percent"))

        with track_time("common_phrases", self.timings):
            phrases = common_ngrams(
                left_tokens,
                right_tokens,
                n=cfg.resolve("ngram_size"),
                limit=cfg.resolve("max_common_phrases"),
            )

        return ComparisonResult(
            similarity=SimilarityScores(
                jaccard=round(jaccard_score),
                levenshtein=None if levenshtein_score is None else round(levenshtein_score),
                overall=overall,
            ),
            changes=changes,
            common_word_count=overlap.common,
            unique_words_left=overlap.unique_left,
            unique_words_right=overlap.unique_right,
            common_phrases=tuple(phrases),
            word_diff=truncate(word_diff, cfg.resolve("word_diff_limit")),
            sentence_diff=truncate(sentence_diff, cfg.resolve("sentence_diff_limit")),
            char_diff=truncate(char_diff, cfg.resolve("char_diff_limit")),
            structural=_structural_changes(left, right),
            left_word_count=left.word_count,
            right_word_count=right.word_count,
            file_types={"left": left.file_type.value, "right": right.file_type.value},
        )

    def _levenshtein_score(self, left_text: str, right_text: str) -> Optional[float]:
        """Unrounded Levenshtein similarity, or None when the texts exceed the size cap."""
        max_len = max(len(left_text), len(right_text))
        cap = self.config.resolve("max_levenshtein_chars")
        if max_len > cap:
            logger.warning(
                "Skipping Levenshtein similarity: %d chars exceeds limit of %d; overall uses Jaccard only",
                max_len,
                cap,
            )
            return None
        return levenshtein_ratio(left_text, right_text)


def _structural_changes(left: DocumentAnalysis, right: DocumentAnalysis) -> StructuralChanges:
    if left.word_count > 0:
        percent = (right.word_count - left.word_count) / left.word_count * 100
    else:
        percent = 0.0
    return StructuralChanges(
        page_count_change=abs(left.total_pages - right.total_pages),
        word_count_change=abs(left.word_count - right.word_count),
        char_count_change=abs(left.char_count - right.char_count),
        word_count_change_percent=round(percent, 2),
    )


def compare_documents(
    left_pages: Sequence[str],
    right_pages: Sequence[str],
    *,
    left_name: str = "left",
    right_name: str = "right",
    config: Optional[EngineConfig] = None,
) -> ComparisonOutcome:
    """
    Compare two documents given as ordered page texts.

    This is the main entrypoint for programmatic usage.

    Example:
        from pipeline import compare_documents
        from comparison.models import ComparisonResult

        outcome = compare_documents(["page one ..."], ["page one, revised ..."])
        if isinstance(outcome, ComparisonResult):
            print(outcome.similarity.overall)
    """
    engine = ComparisonEngine(config)
    return engine.compare(left_pages, right_pages, left_name, right_name)


def compare_files(
    path_a: str | Path,
    path_b: str | Path,
    *,
    config: Optional[EngineConfig] = None,
) -> ComparisonOutcome:
    """
    Load two documents from disk and compare them.

    PDFs are read with PyMuPDF, other files as form-feed separated text.
    ExtractionError propagates to the caller unchanged.
    """
    path_a = Path(path_a)
    path_b = Path(path_b)
    logger.info("=== Comparing %s vs %s ===", path_a, path_b)
    outcome = compare_documents(
        load_pages(path_a),
        load_pages(path_b),
        left_name=path_a.name,
        right_name=path_b.name,
        config=config,
    )
    logger.info("Outcome: %s", outcome_kind(outcome))
    return outcome
