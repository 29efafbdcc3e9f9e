from .models import (
    DocumentIndex,
    IndexMetadata,
    ParsedDocument,
    ParsedPage,
    SearchMatch,
    Section,
    Table,
)
from .pdf_parser import PdfTextSource, compute_file_hash, extract_page_lines, parse_pdf
from .section_extractor import (
    build_toc,
    extract_sections,
    filter_sections_by_depth,
    find_section_by_id_or_title,
    get_section_content,
)
from .table_extractor import (
    extract_tables,
    find_table_by_name_or_id,
    find_table_candidates,
    format_table,
)

__all__ = [
    # Models
    "DocumentIndex",
    "IndexMetadata",
    "ParsedDocument",
    "ParsedPage",
    "SearchMatch",
    "Section",
    "Table",
    # Text source
    "PdfTextSource",
    "compute_file_hash",
    "extract_page_lines",
    "parse_pdf",
    # Sections
    "build_toc",
    "extract_sections",
    "filter_sections_by_depth",
    "find_section_by_id_or_title",
    "get_section_content",
    # Tables
    "extract_tables",
    "find_table_by_name_or_id",
    "find_table_candidates",
    "format_table",
]
