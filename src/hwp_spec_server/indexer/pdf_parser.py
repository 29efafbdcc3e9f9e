"""PDF text source built on PyMuPDF.

Turns a specification PDF into ordered pages of ordered text lines plus a
content hash. Spans are grouped into lines by baseline; horizontally
separated spans on one line are joined with a double space so column
structure survives for the table heuristics.
"""

import asyncio
import hashlib
import os
from pathlib import Path

import fitz  # PyMuPDF

from ..documents import DocumentId, get_document_info
from ..errors import HwpSpecError, SourceUnavailableError
from ..logger import logger
from .models import ParsedDocument, ParsedPage

# Baseline jump (points) that starts a new line
LINE_Y_TOLERANCE = 5.0
# Horizontal gap (points) between spans treated as a column break
COLUMN_GAP = 8.0


def compute_file_hash(file_path: str | Path) -> str:
    """Compute the SHA-256 hash of a file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    sha256 = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256.update(chunk)

    return sha256.hexdigest()


def extract_page_lines(page_dict: dict) -> list[str]:
    """Group the spans of one page (PyMuPDF "dict" output) into lines.

    Args:
        page_dict: Result of page.get_text("dict").

    Returns:
        Trimmed, non-empty lines in content-stream order.
    """
    lines: list[str] = []
    current = ""
    last_y: float | None = None
    last_x1: float | None = None

    for block in page_dict.get("blocks", []):
        if block.get("type") != 0:  # images
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "").replace("\x00", "")
                if not text:
                    continue

                x0, _, x1, _ = span["bbox"]
                y = span["origin"][1]

                if last_y is not None and abs(y - last_y) > LINE_Y_TOLERANCE:
                    if current.strip():
                        lines.append(current.strip())
                    current = text
                elif last_x1 is not None and x0 - last_x1 >= COLUMN_GAP:
                    current += "  " + text
                else:
                    current += text

                last_y = y
                last_x1 = x1

    if current.strip():
        lines.append(current.strip())

    return lines


def parse_pdf(file_path: str | Path) -> ParsedDocument:
    """Parse a PDF file into pages of text lines.

    Args:
        file_path: Path to the PDF file.

    Returns:
        ParsedDocument with one ParsedPage per PDF page.
    """
    file_path = Path(file_path)
    content_hash = compute_file_hash(file_path)

    doc = fitz.open(file_path)
    try:
        logger.info("parsing pdf", file_path=str(file_path), total_pages=doc.page_count)

        pages = [
            ParsedPage(
                page_number=page_num + 1,
                lines=extract_page_lines(page.get_text("dict")),
            )
            for page_num, page in enumerate(doc)
        ]

        logger.info(
            "pdf parsed successfully",
            file_path=str(file_path),
            total_pages=len(pages),
            total_lines=sum(len(p.lines) for p in pages),
        )

        return ParsedDocument(
            filename=file_path.name,
            content_hash=content_hash,
            page_count=doc.page_count,
            pages=pages,
        )
    finally:
        doc.close()


class PdfTextSource:
    """Serves known documents from a directory of specification PDFs."""

    def __init__(self, docs_dir: str | Path | None = None):
        self.docs_dir = Path(docs_dir or os.getenv("HWP_SPEC_DOCS_DIR", "./docs"))

    def resolve_path(self, document_id: str | DocumentId) -> Path:
        """Return the PDF path for a document, raising DocumentNotFoundError if unknown."""
        return self.docs_dir / get_document_info(document_id).filename

    async def get_content_hash(self, document_id: str | DocumentId) -> str:
        path = self.resolve_path(document_id)
        try:
            return await asyncio.to_thread(compute_file_hash, path)
        except OSError as e:
            logger.error("content hash failed", file_path=str(path), error=str(e))
            raise SourceUnavailableError(path.name, e) from e

    async def get_parsed_document(self, document_id: str | DocumentId) -> ParsedDocument:
        path = self.resolve_path(document_id)
        try:
            return await asyncio.to_thread(parse_pdf, path)
        except HwpSpecError:
            raise
        except Exception as e:
            logger.error("pdf parse failed", file_path=str(path), error=str(e))
            raise SourceUnavailableError(path.name, e) from e
