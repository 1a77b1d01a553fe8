"""Page text sources: PyMuPDF for PDFs, form-feed separated text files."""
from __future__ import annotations

from pathlib import Path
from typing import List

from utils.logging import logger

SUPPORTED_PDF_EXTENSIONS = {".pdf"}
PAGE_BREAK = "\f"


class ExtractionError(RuntimeError):
    """Raised when page text cannot be read from a document."""


def extract_page_texts(path: str | Path) -> List[str]:
    """
    Extract the raw text of every page of a PDF.

    Args:
        path: Path to the PDF file

    Returns:
        One string per page, in page order (empty for pages without text)

    Raises:
        ExtractionError: if the file is missing or PyMuPDF cannot read it
    """
    pdf_path = Path(path)
    if not pdf_path.exists():
        raise ExtractionError(f"File not found: {pdf_path}")
    if pdf_path.suffix.lower() not in SUPPORTED_PDF_EXTENSIONS:
        raise ExtractionError(f"Unsupported file type: {pdf_path.suffix}")

    try:
        import fitz  # PyMuPDF
    except ImportError as exc:
        raise ExtractionError("PyMuPDF is required to read PDF files") from exc

    logger.info("Extracting page text: %s", pdf_path)
    try:
        doc = fitz.open(pdf_path)
    except Exception as exc:
        raise ExtractionError(f"Failed to extract text from {pdf_path.name}: {exc}") from exc

    try:
        texts = [page.get_text() for page in doc]
    except Exception as exc:
        raise ExtractionError(f"Failed to extract text from {pdf_path.name}: {exc}") from exc
    finally:
        doc.close()

    logger.debug("Extracted %d pages from %s", len(texts), pdf_path.name)
    return texts


def load_text_pages(path: str | Path, encoding: str = "utf-8") -> List[str]:
    """
    Read a plain-text document whose pages are separated by form feeds.

    An empty file has no pages.
    """
    text_path = Path(path)
    try:
        content = text_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Failed to read {text_path}: {exc}") from exc
    if not content:
        return []
    return content.split(PAGE_BREAK)


def load_pages(path: str | Path) -> List[str]:
    """Dispatch on the file extension: PDFs through PyMuPDF, anything else as text."""
    if Path(path).suffix.lower() in SUPPORTED_PDF_EXTENSIONS:
        return extract_page_texts(path)
    return load_text_pages(path)
