"""Shared data models for page classification and document comparison."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class FileType(Enum):
    """Document-level classification."""
    TEXT_BASED = "text-based"
    IMAGE_BASED = "image-based"


class ExtractionQuality(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class PageRecord:
    page_number: int  # 1-indexed
    raw_text: str
    has_text: bool
    text_length: int

    def to_dict(self) -> dict:
        return {
            "page_number": self.page_number,
            "has_text": self.has_text,
            "text_length": self.text_length,
        }


@dataclass(frozen=True)
class DocumentAnalysis:
    file_name: str
    total_pages: int
    text_pages: int
    image_pages: int
    normalized_text: str
    file_type: FileType
    confidence: int  # 0-100
    word_count: int
    char_count: int
    pages: Tuple[PageRecord, ...] = ()
    extraction_quality: ExtractionQuality = ExtractionQuality.LOW
    avg_words_per_page: int = 0

    @property
    def is_image_based(self) -> bool:
        return self.file_type is FileType.IMAGE_BASED

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to compare (no pages or no usable text)."""
        return self.total_pages == 0 or not self.normalized_text

    def to_dict(self) -> dict:
        return {
            "file_name": self.file_name,
            "total_pages": self.total_pages,
            "text_pages": self.text_pages,
            "image_pages": self.image_pages,
            "file_type": self.file_type.value,
            "confidence": self.confidence,
            "word_count": self.word_count,
            "char_count": self.char_count,
            "extraction_quality": self.extraction_quality.value,
            "avg_words_per_page": self.avg_words_per_page,
            "pages": [page.to_dict() for page in self.pages],
        }


class DiffKind(Enum):
    """Kind of a diff segment."""
    EQUAL = "equal"
    ADDED = "added"
    REMOVED = "removed"


SegmentValue = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class DiffSegment:
    """
    One run of an edit script.

    ``value`` is a string for character and word diffs and a tuple of
    sentences for sentence diffs.
    """
    kind: DiffKind
    value: SegmentValue

    def token_count(self) -> int:
        """Number of whitespace-delimited tokens in the segment."""
        if isinstance(self.value, tuple):
            return sum(len(item.split()) for item in self.value)
        return len(self.value.split())

    def char_count(self) -> int:
        if isinstance(self.value, tuple):
            return sum(len(item) for item in self.value)
        return len(self.value)

    def to_dict(self) -> dict:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"kind": self.kind.value, "value": value}


DiffScript = Tuple[DiffSegment, ...]


@dataclass(frozen=True)
class SimilarityScores:
    jaccard: int
    levenshtein: Optional[int]  # None when skipped for size
    overall: int

    def to_dict(self) -> dict:
        return {"jaccard": self.jaccard, "levenshtein": self.levenshtein, "overall": self.overall}


@dataclass(frozen=True)
class ChangeSummary:
    """Word-level change counts derived from a full (untruncated) word diff."""
    added: int
    removed: int
    unchanged: int
    change_percentage: int
    added_chars: int = 0
    removed_chars: int = 0
    significant_changes: bool = False

    def to_dict(self) -> dict:
        return {
            "added": self.added,
            "removed": self.removed,
            "unchanged": self.unchanged,
            "change_percentage": self.change_percentage,
            "added_chars": self.added_chars,
            "removed_chars": self.removed_chars,
            "significant_changes": self.significant_changes,
        }


@dataclass(frozen=True)
class StructuralChanges:
    page_count_change: int
    word_count_change: int
    char_count_change: int
    word_count_change_percent: float  # signed, relative to the left document

    def to_dict(self) -> dict:
        return {
            "page_count_change": self.page_count_change,
            "word_count_change": self.word_count_change,
            "char_count_change": self.char_count_change,
            "word_count_change_percent": self.word_count_change_percent,
        }


@dataclass(frozen=True)
class ComparisonResult:
    similarity: SimilarityScores
    changes: ChangeSummary
    common_word_count: int
    unique_words_left: int
    unique_words_right: int
    common_phrases: Tuple[str, ...]
    word_diff: DiffScript
    sentence_diff: DiffScript
    char_diff: DiffScript = ()
    structural: Optional[StructuralChanges] = None
    left_word_count: int = 0
    right_word_count: int = 0
    file_types: Dict[str, str] = field(default_factory=dict)
    requires_ocr: bool = False

    def to_dict(self) -> dict:
        return {
            "requires_ocr": self.requires_ocr,
            "similarity": self.similarity.to_dict(),
            "changes": self.changes.to_dict(),
            "common_word_count": self.common_word_count,
            "unique_words_left": self.unique_words_left,
            "unique_words_right": self.unique_words_right,
            "common_phrases": list(self.common_phrases),
            "word_diff": [segment.to_dict() for segment in self.word_diff],
            "sentence_diff": [segment.to_dict() for segment in self.sentence_diff],
            "char_diff": [segment.to_dict() for segment in self.char_diff],
            "structural": self.structural.to_dict() if self.structural else None,
            "left_word_count": self.left_word_count,
            "right_word_count": self.right_word_count,
            "file_types": dict(self.file_types),
        }


@dataclass(frozen=True)
class OCRRequiredSignal:
    """At least one document is image-based; route it to OCR before comparing."""
    left_is_image_based: bool
    right_is_image_based: bool
    left_analysis: DocumentAnalysis
    right_analysis: DocumentAnalysis
    requires_ocr: bool = True

    def to_dict(self) -> dict:
        return {
            "requires_ocr": self.requires_ocr,
            "left_is_image_based": self.left_is_image_based,
            "right_is_image_based": self.right_is_image_based,
            "left_analysis": self.left_analysis.to_dict(),
            "right_analysis": self.right_analysis.to_dict(),
        }


@dataclass(frozen=True)
class EmptyInputSignal:
    left_is_empty: bool
    right_is_empty: bool
    reason: str = "no extractable text"
    requires_ocr: bool = False

    def to_dict(self) -> dict:
        return {
            "requires_ocr": self.requires_ocr,
            "left_is_empty": self.left_is_empty,
            "right_is_empty": self.right_is_empty,
            "reason": self.reason,
        }


ComparisonOutcome = Union[ComparisonResult, OCRRequiredSignal, EmptyInputSignal]


def outcome_kind(outcome: ComparisonOutcome) -> str:
    """Short label for an outcome, used in exports and logs."""
    if isinstance(outcome, OCRRequiredSignal):
        return "ocr_required"
    if isinstance(outcome, EmptyInputSignal):
        return "empty_input"
    return "result"
