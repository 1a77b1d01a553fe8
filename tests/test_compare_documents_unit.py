from __future__ import annotations

import pytest

from comparison.models import (
    ComparisonResult,
    DiffKind,
    DiffSegment,
    EmptyInputSignal,
    OCRRequiredSignal,
)
from pipeline import ComparisonEngine, ComparisonState, EngineConfig, compare_documents

CONTRACT_V1 = [
    "This agreement is made between the supplier and the customer. "
    "The supplier shall deliver the goods within thirty days of the order.",
    "Payment is due within fourteen days of delivery. "
    "Late payments accrue interest at two percent per month.",
]
CONTRACT_V2 = [
    "This agreement is made between the supplier and the customer. "
    "The supplier shall deliver the goods within forty days of the order.",
    "Payment is due within fourteen days of delivery. "
    "Late payments accrue interest at two percent per month. Disputes go to arbitration.",
]


def _sequential(**overrides) -> EngineConfig:
    return EngineConfig(parallel_classification=False, **overrides)


def test_identity_comparison():
    outcome = compare_documents(CONTRACT_V1, CONTRACT_V1)
    assert isinstance(outcome, ComparisonResult)
    assert outcome.requires_ocr is False
    assert outcome.similarity.jaccard == 100
    assert outcome.similarity.levenshtein == 100
    assert outcome.similarity.overall == 100
    assert outcome.changes.added == 0
    assert outcome.changes.removed == 0
    assert outcome.changes.change_percentage == 0
    assert outcome.unique_words_left == 0
    assert outcome.unique_words_right == 0
    assert all(segment.kind is DiffKind.EQUAL for segment in outcome.word_diff)


def test_revision_comparison_reports_changes():
    outcome = compare_documents(CONTRACT_V1, CONTRACT_V2, config=_sequential())
    assert isinstance(outcome, ComparisonResult)

    assert 0 < outcome.similarity.overall < 100
    # "thirty" -> "forty", then "disputes go to arbitration." appended
    assert outcome.left_word_count == 39
    assert outcome.changes.removed == 1
    assert outcome.changes.added == 5
    assert outcome.changes.unchanged == 38
    assert outcome.unique_words_left == 1  # "thirty"
    assert outcome.unique_words_right == 3  # "forty", "disputes", "arbitration"
    assert "this agreement is" in outcome.common_phrases
    assert len(outcome.common_phrases) <= 10
    assert len(set(outcome.common_phrases)) == len(outcome.common_phrases)
    assert outcome.structural.page_count_change == 0
    assert outcome.file_types == {"left": "text-based", "right": "text-based"}

    removed_text = "".join(s.value for s in outcome.word_diff if s.kind is DiffKind.REMOVED)
    added_text = "".join(s.value for s in outcome.word_diff if s.kind is DiffKind.ADDED)
    assert "thirty" in removed_text
    assert "forty" in added_text


def test_single_word_edit_scenario():
    outcome = compare_documents(
        ["the quick fox"], ["the slow fox"], config=_sequential(min_page_text_chars=0)
    )
    assert isinstance(outcome, ComparisonResult)
    removed = [s for s in outcome.word_diff if s.kind is DiffKind.REMOVED]
    added = [s for s in outcome.word_diff if s.kind is DiffKind.ADDED]
    assert removed == [DiffSegment(DiffKind.REMOVED, "quick ")]
    assert added == [DiffSegment(DiffKind.ADDED, "slow ")]
    assert outcome.changes.added == 1
    assert outcome.changes.removed == 1
    assert outcome.changes.unchanged == 2
    assert outcome.changes.change_percentage == 50


ELEVEN_WORDS = "alpha bravo charlie delta echo foxtrot golf hotel india juliet kilo"


def test_word_appended_at_end_of_document():
    outcome = compare_documents([ELEVEN_WORDS], [ELEVEN_WORDS + " lima"], config=_sequential())
    assert isinstance(outcome, ComparisonResult)
    assert outcome.changes.added == 1
    assert outcome.changes.removed == 0
    assert outcome.changes.unchanged == 11
    assert outcome.changes.change_percentage == 8
    assert outcome.word_diff == (
        DiffSegment(DiffKind.EQUAL, ELEVEN_WORDS),
        DiffSegment(DiffKind.ADDED, " lima"),
    )


def test_word_deleted_at_end_of_document():
    outcome = compare_documents([ELEVEN_WORDS + " lima"], [ELEVEN_WORDS], config=_sequential())
    assert isinstance(outcome, ComparisonResult)
    assert outcome.changes.added == 0
    assert outcome.changes.removed == 1
    assert outcome.changes.unchanged == 11


def test_disjoint_documents_scenario():
    outcome = compare_documents(
        ["alpha beta gamma"], ["delta epsilon zeta"], config=_sequential(min_page_text_chars=0)
    )
    assert isinstance(outcome, ComparisonResult)
    assert outcome.common_word_count == 0
    assert outcome.similarity.jaccard == 0
    assert outcome.unique_words_left == 3
    assert outcome.unique_words_right == 3
    assert outcome.common_phrases == ()


def test_image_based_document_short_circuits():
    engine = ComparisonEngine(_sequential())
    outcome = engine.compare(CONTRACT_V1, ["", "Figure 2", "x" * 50], "a.pdf", "scan.pdf")

    assert isinstance(outcome, OCRRequiredSignal)
    assert outcome.requires_ocr is True
    assert outcome.left_is_image_based is False
    assert outcome.right_is_image_based is True
    assert outcome.right_analysis.file_name == "scan.pdf"
    assert engine.state is ComparisonState.OCR_REQUIRED
    # No diff step ran
    assert not any(t.name.endswith("_diff") for t in engine.timings)


@pytest.mark.parametrize("left,right", [([], CONTRACT_V1), (CONTRACT_V1, []), ([], [])])
def test_empty_document_yields_empty_signal(left, right):
    outcome = compare_documents(left, right)
    assert isinstance(outcome, EmptyInputSignal)
    assert outcome.left_is_empty is (not left)
    assert outcome.right_is_empty is (not right)


def test_text_that_normalizes_to_nothing_yields_empty_signal():
    outcome = compare_documents(["@@@ ###"], CONTRACT_V1[:1], config=_sequential(min_page_text_chars=0))
    assert isinstance(outcome, EmptyInputSignal)
    assert outcome.left_is_empty is True


def test_levenshtein_skipped_above_size_cap():
    outcome = compare_documents(CONTRACT_V1, CONTRACT_V2, config=_sequential(max_levenshtein_chars=10))
    assert isinstance(outcome, ComparisonResult)
    assert outcome.similarity.levenshtein is None
    assert outcome.similarity.overall == outcome.similarity.jaccard


def test_report_truncation_does_not_affect_counts():
    full = compare_documents(CONTRACT_V1, CONTRACT_V2, config=_sequential())
    limited = compare_documents(
        CONTRACT_V1, CONTRACT_V2, config=_sequential(word_diff_limit=1, sentence_diff_limit=1, char_diff_limit=2)
    )
    assert len(limited.word_diff) == 1
    assert len(limited.sentence_diff) == 1
    assert len(limited.char_diff) == 2
    assert limited.changes == full.changes


def test_parallel_and_sequential_agree():
    parallel = compare_documents(CONTRACT_V1, CONTRACT_V2, config=EngineConfig(parallel_classification=True))
    sequential = compare_documents(CONTRACT_V1, CONTRACT_V2, config=_sequential())
    assert parallel == sequential


def test_progress_callback_is_clamped_and_finishes():
    events = []
    config = _sequential(progress_callback=lambda percent, task: events.append((percent, task)))
    engine = ComparisonEngine(config)
    engine.compare(CONTRACT_V1, CONTRACT_V2)

    assert events[0][0] == 0
    assert events[-1] == (100, "Comparison complete")
    assert all(0 <= percent <= 100 for percent, _ in events)
    assert engine.state is ComparisonState.DONE


def test_result_to_dict_shape():
    outcome = compare_documents(CONTRACT_V1, CONTRACT_V2)
    data = outcome.to_dict()
    assert data["requires_ocr"] is False
    assert set(data["similarity"]) == {"jaccard", "levenshtein", "overall"}
    assert data["word_diff"][0]["kind"] in {"equal", "added", "removed"}
    assert isinstance(data["sentence_diff"][0]["value"], list)


def test_compare_analyses_timings_cover_only_the_latest_call():
    engine = ComparisonEngine(_sequential())
    left = engine.analyze(CONTRACT_V1, "v1")
    right = engine.analyze(CONTRACT_V2, "v2")

    engine.compare_analyses(left, right)
    first = [t.name for t in engine.timings]
    engine.compare_analyses(left, right)

    assert [t.name for t in engine.timings] == first
    assert [t.name for t in engine.timings].count("word_diff") == 1
    assert "classify" not in first


def test_compare_keeps_classification_timings():
    engine = ComparisonEngine(_sequential())
    engine.compare(CONTRACT_V1, CONTRACT_V2)
    engine.compare(CONTRACT_V1, CONTRACT_V2)
    names = [t.name for t in engine.timings]
    assert names.count("classify") == 2
    assert names.count("word_diff") == 1
