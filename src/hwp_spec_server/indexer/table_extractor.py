"""Table extraction from captioned regions of page text."""

import re
from collections.abc import Sequence

from pydantic import BaseModel

from .models import ParsedDocument, ParsedPage, Table
from .text_patterns import (
    is_table_row,
    looks_like_heading,
    match_table_caption,
    match_table_header,
    split_row,
)

TABLE_NUMBER_QUERY = re.compile(r"^\d+(?:[-.]\d+)?$")


class TableCandidate(BaseModel):
    """A caption or header line and the line span that may follow it."""

    id: str
    name: str
    page: int
    start_line: int
    end_line: int
    has_rows: bool


def _is_span_row(line: str) -> bool:
    # a numbered heading ends the table even when its spacing looks tabular
    return is_table_row(line) and not looks_like_heading(line)


def _find_table_span(lines: list[str], caption_index: int) -> tuple[int, int, bool]:
    """Scan forward from a caption to find the lines that look tabular.

    The scan stops at the first section heading, at a blank line not
    followed by a row, and at the first other non-row line.

    Returns:
        (start_line, end_line, has_rows), end_line inclusive and never
        before start_line.
    """
    start = caption_index + 1
    end = start
    has_rows = False

    for i in range(start, len(lines)):
        line = lines[i]
        if _is_span_row(line):
            end = i
            has_rows = True
        elif not line.strip():
            if i + 1 < len(lines) and _is_span_row(lines[i + 1]):
                continue
            break
        else:
            break

    return start, max(end, start), has_rows


def find_table_candidates(document: ParsedDocument) -> list[TableCandidate]:
    candidates = []

    for page in document.pages:
        for i, line in enumerate(page.lines):
            caption = match_table_caption(line)
            if caption:
                number, name = caption
            else:
                number = match_table_header(line)
                if number is None:
                    continue
                name = line.strip()

            start, end, has_rows = _find_table_span(page.lines, i)
            candidates.append(
                TableCandidate(
                    id=f"table-{number}",
                    name=name,
                    page=page.page_number,
                    start_line=start,
                    end_line=end,
                    has_rows=has_rows,
                )
            )

    return candidates


def _extract_rows(page: ParsedPage, start_line: int, end_line: int) -> list[tuple[str, ...]]:
    rows = []
    for line in page.lines[start_line : end_line + 1]:
        if not line.strip():
            continue
        cells = split_row(line)
        if cells:
            rows.append(tuple(cells))
    return rows


def extract_tables(document: ParsedDocument) -> list[Table]:
    """Extract captioned tables from a parsed document.

    Candidates without any row-like line after the caption are dropped, so
    every returned table has at least one row.

    Args:
        document: ParsedDocument from the text source.

    Returns:
        Tables in caption order.
    """
    pages = {page.page_number: page for page in document.pages}
    tables = []

    for candidate in find_table_candidates(document):
        if not candidate.has_rows:
            continue
        rows = _extract_rows(pages[candidate.page], candidate.start_line, candidate.end_line)
        if rows:
            tables.append(
                Table(
                    id=candidate.id,
                    name=candidate.name,
                    page=candidate.page,
                    rows=tuple(rows),
                )
            )

    return tables


def find_table_by_name_or_id(tables: Sequence[Table], query: str) -> Table | None:
    """Resolve a query against table ids and names.

    Precedence: exact id (case-insensitive), then, for numeric queries like
    "3" or "1-2", an id substring, then a case-insensitive name substring.
    """
    normalized = query.strip().lower()
    if not normalized:
        return None

    for table in tables:
        if table.id.lower() == normalized:
            return table

    number = query.strip()
    if TABLE_NUMBER_QUERY.match(number):
        for table in tables:
            if number in table.id:
                return table

    for table in tables:
        if normalized in table.name.lower():
            return table

    return None


def format_table(table: Table) -> str:
    """Render a table as padded, pipe-delimited text."""
    if not table.rows:
        return f"Table: {table.name} (empty)"

    lines = [f"Table {table.id}: {table.name} (page {table.page})", ""]

    col_widths: list[int] = []
    for row in table.rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(cell))
            else:
                col_widths.append(len(cell))

    for row in table.rows:
        cells = [cell.ljust(col_widths[i]) for i, cell in enumerate(row)]
        lines.append("| " + " | ".join(cells) + " |")

    return "\n".join(lines)
