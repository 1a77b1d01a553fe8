"""Per-page text/image classification and document-level aggregation."""
from __future__ import annotations

from typing import List, Optional, Sequence

from comparison.models import DocumentAnalysis, ExtractionQuality, FileType, PageRecord
from config.settings import settings
from utils.logging import logger
from utils.text_normalization import normalize_document_text

PARAGRAPH_SEPARATOR = "\n\n"


def build_page_records(page_texts: Sequence[str], min_text_chars: Optional[int] = None) -> List[PageRecord]:
    """
    Turn raw page texts into PageRecords (1-indexed by position).

    A page is text-bearing when its stripped text is longer than
    ``min_text_chars`` (default: ``settings.min_page_text_chars``).

    Raises:
        ValueError: if a page is ``None``; use ``""`` for a text-less page
    """
    threshold = settings.min_page_text_chars if min_text_chars is None else min_text_chars
    records: List[PageRecord] = []
    for index, text in enumerate(page_texts, start=1):
        if text is None:
            raise ValueError(f"Page {index} is None; pass an empty string for text-less pages")
        text_length = len(text.strip())
        records.append(PageRecord(
            page_number=index,
            raw_text=text,
            has_text=text_length > threshold,
            text_length=text_length,
        ))
    return records


def _extraction_quality(text_pages: int, total_pages: int) -> ExtractionQuality:
    if text_pages > total_pages * 0.8:
        return ExtractionQuality.HIGH
    if text_pages > total_pages * 0.5:
        return ExtractionQuality.MEDIUM
    return ExtractionQuality.LOW


def classify_pages(
    page_texts: Sequence[str],
    file_name: str = "",
    *,
    min_text_chars: Optional[int] = None,
    allowed_punctuation: Optional[str] = None,
) -> DocumentAnalysis:
    """
    Classify a document's pages and build its DocumentAnalysis.

    Only text-bearing pages contribute to ``normalized_text``. An empty
    ``page_texts`` produces ``total_pages == 0`` with ``confidence == 0``;
    callers must treat that as "no content".

    Args:
        page_texts: Raw text per page, in page order
        file_name: Name reported in the analysis
        min_text_chars: Override for the text-bearing threshold
        allowed_punctuation: Override for the normalization allow-list

    Returns:
        DocumentAnalysis for the document
    """
    pages = build_page_records(page_texts, min_text_chars)
    total_pages = len(pages)
    text_pages = sum(1 for page in pages if page.has_text)
    image_pages = total_pages - text_pages

    raw = "".join(page.raw_text + PARAGRAPH_SEPARATOR for page in pages if page.has_text)
    punctuation = settings.allowed_punctuation if allowed_punctuation is None else allowed_punctuation
    normalized = normalize_document_text(raw, punctuation)

    if total_pages == 0:
        confidence = 0
    else:
        confidence = round(max(text_pages, image_pages) / total_pages * 100)

    word_count = len(normalized.split())
    file_type = FileType.TEXT_BASED if text_pages > image_pages else FileType.IMAGE_BASED

    analysis = DocumentAnalysis(
        file_name=file_name,
        total_pages=total_pages,
        text_pages=text_pages,
        image_pages=image_pages,
        normalized_text=normalized,
        file_type=file_type,
        confidence=confidence,
        word_count=word_count,
        char_count=len(normalized),
        pages=tuple(pages),
        extraction_quality=_extraction_quality(text_pages, total_pages),
        avg_words_per_page=round(word_count / max(text_pages, 1)),
    )

    logger.info(
        "Classified %s: %d pages (%d text, %d image) -> %s (%d%% confidence)",
        file_name or "<unnamed>",
        total_pages,
        text_pages,
        image_pages,
        file_type.value,
        confidence,
    )
    for page in pages:
        logger.debug("  page %d: %d chars, has_text=%s", page.page_number, page.text_length, page.has_text)

    return analysis
