"""Line classifiers shared by the section and table extractors.

Each predicate looks at a single raw line and answers one question. The
extractors compose them in a fixed order, so any one heuristic can be tuned
without touching the scanning loops.
"""

import re

# "1", "1.", "1.1", "2.3.4.5" followed by a title
SECTION_PATTERN = re.compile(r"^(\d+(?:\.\d+)*\.?)\s+(.+)$")

# "[표 1-1] : 이름", "Table 3. Name", "테이블 2: 이름"
TABLE_CAPTION_PATTERN = re.compile(
    r"^\[?(?:표|Table|테이블)\s*(\d+(?:[-.]\d+)?)\]?\s*[:.]\s*(.+)",
    re.IGNORECASE,
)
# Any mention of a table marker plus a number, e.g. "표 4 문서 정보"
TABLE_HEADER_PATTERN = re.compile(
    r"(?:표|Table|테이블)\s*(\d+(?:[-.]\d+)?)", re.IGNORECASE
)

STRUCTURED_TOKEN_PATTERN = re.compile(
    r"\b(?:UINT\d+|INT\d+|BYTE|WORD|DWORD|HWPUNIT|SHWPUNIT|COLORREF|WCHAR|unsigned|signed)\b",
    re.IGNORECASE,
)
MULTI_SPACE_PATTERN = re.compile(r"\s{2,}")

MAX_SECTION_DEPTH = 5
MIN_TITLE_LENGTH = 2


def is_heading_noise(section_id: str, title: str) -> bool:
    """True for heading matches that are almost certainly not headings."""
    # page numbers and cross references
    if title.isdigit():
        return True
    if len(title) < MIN_TITLE_LENGTH:
        return True
    # itemized table content
    if len(section_id.split(".")) > MAX_SECTION_DEPTH:
        return True
    return False


def parse_heading(line: str) -> tuple[str, str, int] | None:
    """Parse a numbered heading into (id, title, level)."""
    match = SECTION_PATTERN.match(line.strip())
    if not match:
        return None

    section_id = match.group(1).rstrip(".")
    title = match.group(2).strip()
    if is_heading_noise(section_id, title):
        return None

    return section_id, title, len(section_id.split("."))


def looks_like_heading(line: str) -> bool:
    """True when the line would open a section in the section extractor."""
    return parse_heading(line) is not None


def match_table_caption(line: str) -> tuple[str, str] | None:
    """Return (number, name) for a caption such as "표 3: 문서 정보"."""
    match = TABLE_CAPTION_PATTERN.match(line.strip())
    if not match:
        return None
    return match.group(1), match.group(2).strip()


def match_table_header(line: str) -> str | None:
    """Return the table number for a bare marker line such as "표 3"."""
    match = TABLE_HEADER_PATTERN.search(line)
    return match.group(1) if match else None


def is_table_row(line: str) -> bool:
    trimmed = line.strip()
    if not trimmed:
        return False

    if "\t" in trimmed:
        return True

    # PDF text extraction keeps column gaps as runs of spaces
    if MULTI_SPACE_PATTERN.search(trimmed):
        return True

    return STRUCTURED_TOKEN_PATTERN.search(trimmed) is not None


def split_row(line: str) -> list[str]:
    """Split a row line into cells, tabs first, then runs of spaces."""
    if "\t" in line:
        return [cell.strip() for cell in line.split("\t")]
    return [cell.strip() for cell in MULTI_SPACE_PATTERN.split(line) if cell.strip()]
