"""Section extraction from numbered headings in page text."""

from collections.abc import Sequence

from .models import ParsedDocument, Section
from .text_patterns import parse_heading


def extract_sections(document: ParsedDocument) -> list[Section]:
    """Collect numbered headings in page/line order and derive page ranges.

    Each section ends on the page where the next heading starts, or on the
    document's last page for the final heading. Headings are never merged
    or reordered, so duplicated headings in the source stay duplicated.

    Args:
        document: ParsedDocument from the text source.

    Returns:
        Sections in the order their headings appear.
    """
    headings: list[tuple[str, str, int, int]] = []
    for page in document.pages:
        for line in page.lines:
            heading = parse_heading(line)
            if heading:
                section_id, title, level = heading
                headings.append((section_id, title, level, page.page_number))

    sections = []
    for i, (section_id, title, level, page_number) in enumerate(headings):
        end_page = headings[i + 1][3] if i + 1 < len(headings) else document.page_count
        sections.append(
            Section(
                id=section_id,
                title=title,
                level=level,
                start_page=page_number,
                end_page=end_page,
            )
        )

    return sections


def _page_lines(page_texts: Sequence[str], page_number: int) -> list[str]:
    if page_number < 1 or page_number > len(page_texts):
        return []
    text = page_texts[page_number - 1]
    return text.split("\n") if text else []


def _find_heading_index(lines: list[str], section: Section) -> int:
    for i, line in enumerate(lines):
        if section.id in line and section.title in line:
            return i
    return -1


def get_section_content(page_texts: Sequence[str], section: Section) -> str:
    """Return the text of a section, from its heading through its end page.

    On the start page everything before the heading line is skipped. If the
    heading cannot be found again, the whole start page is used.

    Args:
        page_texts: Per-page joined text, index 0 holding page 1.
        section: Section whose content to return.
    """
    lines: list[str] = []
    for page_number in range(section.start_page, section.end_page + 1):
        page_lines = _page_lines(page_texts, page_number)
        if page_number == section.start_page:
            heading_index = _find_heading_index(page_lines, section)
            if heading_index >= 0:
                page_lines = page_lines[heading_index:]
        lines.extend(page_lines)

    return "\n".join(lines)


def find_section_by_id_or_title(sections: Sequence[Section], query: str) -> Section | None:
    """Resolve a query against section ids and titles.

    Precedence: exact id, then id prefix ("2.1" finds "2.1.1"), then a
    case-insensitive title substring. The first hit in document order at
    the first tier that has one wins.
    """
    normalized = query.strip().lower()
    if not normalized:
        return None

    for section in sections:
        if section.id == normalized:
            return section

    for section in sections:
        if section.id.startswith(normalized + "."):
            return section

    for section in sections:
        if normalized in section.title.lower():
            return section

    return None


def filter_sections_by_depth(sections: Sequence[Section], max_depth: int) -> list[Section]:
    return [s for s in sections if s.level <= max_depth]


def build_toc(sections: Sequence[Section], max_depth: int = 3) -> str:
    """Render an indented outline of sections up to max_depth."""
    return "\n".join(
        f"{'  ' * (s.level - 1)}{s.id} {s.title} (p.{s.start_page})"
        for s in filter_sections_by_depth(sections, max_depth)
    )
