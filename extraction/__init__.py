"""Page text extraction and text/image page classification."""
from extraction.page_classifier import build_page_records, classify_pages
from extraction.pdf_text import ExtractionError, extract_page_texts, load_pages, load_text_pages

__all__ = [
    "build_page_records",
    "classify_pages",
    "ExtractionError",
    "extract_page_texts",
    "load_pages",
    "load_text_pages",
]
