"""Error types shared by the indexer, the cache, and the query surface."""

from typing import Any


class HwpSpecError(Exception):
    """Base error carrying a stable code and structured details."""

    def __init__(
        self, message: str, code: str, details: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class DocumentNotFoundError(HwpSpecError):
    def __init__(self, document_id: str):
        super().__init__(
            f"Document not found: {document_id}",
            "DOCUMENT_NOT_FOUND",
            {"document_id": document_id},
        )


class SectionNotFoundError(HwpSpecError):
    def __init__(self, document_id: str, section_query: str):
        super().__init__(
            f"Section not found: {section_query} in {document_id}",
            "SECTION_NOT_FOUND",
            {"document_id": document_id, "section_query": section_query},
        )


class TableNotFoundError(HwpSpecError):
    def __init__(self, document_id: str, table_query: str):
        super().__init__(
            f"Table not found: {table_query} in {document_id}",
            "TABLE_NOT_FOUND",
            {"document_id": document_id, "table_query": table_query},
        )


class InvalidPageError(HwpSpecError):
    def __init__(self, document_id: str, page: int, page_count: int):
        super().__init__(
            f"Invalid page number: {page}. Document has {page_count} pages.",
            "INVALID_PAGE",
            {"document_id": document_id, "page": page, "page_count": page_count},
        )


class SourceUnavailableError(HwpSpecError):
    """Raised when the text source cannot produce pages or a hash."""

    def __init__(self, filename: str, original_error: Exception | None = None):
        super().__init__(
            f"Failed to read document source: {filename}",
            "SOURCE_UNAVAILABLE",
            {
                "filename": filename,
                "original_error": str(original_error) if original_error else None,
            },
        )


class CacheError(HwpSpecError):
    def __init__(self, operation: str, original_error: Exception | None = None):
        super().__init__(
            f"Cache operation failed: {operation}",
            "CACHE_ERROR",
            {
                "operation": operation,
                "original_error": str(original_error) if original_error else None,
            },
        )


def format_error_for_user(error: object) -> str:
    """Render an error as a single line without internals."""
    if isinstance(error, HwpSpecError):
        return f"[{error.code}] {error.message}"
    return str(error)
