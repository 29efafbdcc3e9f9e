"""Query handlers that turn index lookups into readable text."""

import re

from pydantic import BaseModel, Field

from .cache import IndexManager, get_index_manager
from .documents import DOCUMENTS, DocumentId, get_document_info
from .errors import (
    InvalidPageError,
    SectionNotFoundError,
    TableNotFoundError,
    format_error_for_user,
)
from .indexer import (
    SearchMatch,
    build_toc,
    find_section_by_id_or_title,
    find_table_by_name_or_id,
    format_table,
    get_section_content,
)

# Matches shown per document in search output
MAX_MATCHES_PER_DOCUMENT = 5
# Entries listed when a section or table query has no match
MAX_SUGGESTIONS = 10


# --- Inputs ---


class SearchSpecInput(BaseModel):
    query: str = Field(..., min_length=1, description="검색어")
    document: str | None = Field(default=None, description="대상 문서 (생략시 전체)")


class GetSectionInput(BaseModel):
    document: str = Field(..., description="대상 문서")
    section: str = Field(
        ..., min_length=1, description='섹션 번호 또는 제목 (예: "2.1.3" 또는 "FileHeader")'
    )


class GetTableInput(BaseModel):
    document: str = Field(..., description="대상 문서")
    table_name: str = Field(..., min_length=1, description="테이블 이름 또는 번호")


class ListSectionsInput(BaseModel):
    document: str = Field(..., description="대상 문서")
    depth: int = Field(default=2, ge=1, le=5, description="목차 깊이 (기본값: 2)")


class GetPageInput(BaseModel):
    document: str = Field(..., description="대상 문서")
    page: int = Field(..., description="페이지 번호 (1부터)")


# --- Handlers ---


async def search_spec(request: SearchSpecInput, manager: IndexManager | None = None) -> str:
    manager = manager or get_index_manager()
    if request.document is not None:
        get_document_info(request.document)

    matches = await manager.search(request.query, request.document)
    if not matches:
        return f'검색 결과가 없습니다: "{request.query}"'

    lines = [f'검색 결과: "{request.query}" ({len(matches)}건)', ""]

    by_document: dict[DocumentId, list[SearchMatch]] = {}
    for match in matches:
        by_document.setdefault(match.document, []).append(match)

    for doc_id, doc_matches in by_document.items():
        info = DOCUMENTS[doc_id]
        lines.append(f"## {info.description} ({info.filename})")
        lines.append("")

        for match in doc_matches[:MAX_MATCHES_PER_DOCUMENT]:
            section_info = (
                f"{match.section.id} {match.section.title}" if match.section else "(섹션 미확인)"
            )
            lines.append(f"- **페이지 {match.page}** - {section_info}")
            lines.append(f"  > {match.context}")
            lines.append("")

        remaining = len(doc_matches) - MAX_MATCHES_PER_DOCUMENT
        if remaining > 0:
            lines.append(f"  ... 외 {remaining}건")
            lines.append("")

    return "\n".join(lines)


async def get_section(request: GetSectionInput, manager: IndexManager | None = None) -> str:
    manager = manager or get_index_manager()
    info = get_document_info(request.document)

    index = await manager.get_index(info.id)
    section = find_section_by_id_or_title(index.sections, request.section)

    if section is None:
        samples = "\n  ".join(f"{s.id} {s.title}" for s in index.sections[:MAX_SUGGESTIONS])
        not_found = format_error_for_user(SectionNotFoundError(info.id.value, request.section))
        return f"{not_found}\n\n사용 가능한 섹션 예시:\n  {samples}"

    content = get_section_content(index.page_texts, section)

    lines = [
        f"# {section.id} {section.title}",
        f"문서: {info.description}",
        f"페이지: {section.start_page} - {section.end_page}",
        "",
        "---",
        "",
        content,
    ]
    return "\n".join(lines)


async def get_table(request: GetTableInput, manager: IndexManager | None = None) -> str:
    manager = manager or get_index_manager()
    info = get_document_info(request.document)

    index = await manager.get_index(info.id)
    table = find_table_by_name_or_id(index.tables, request.table_name)

    if table is None:
        if not index.tables:
            return f"{info.description}에서 테이블을 찾을 수 없습니다."
        samples = "\n  ".join(f"{t.id}: {t.name}" for t in index.tables[:MAX_SUGGESTIONS])
        not_found = format_error_for_user(TableNotFoundError(info.id.value, request.table_name))
        return f"{not_found}\n\n사용 가능한 테이블:\n  {samples}"

    return "\n".join([f"문서: {info.description}", "", format_table(table)])


async def list_sections(request: ListSectionsInput, manager: IndexManager | None = None) -> str:
    manager = manager or get_index_manager()
    info = get_document_info(request.document)

    index = await manager.get_index(info.id)
    toc = build_toc(index.sections, request.depth)

    lines = [
        f"# {info.description} 목차",
        f"파일: {info.filename}",
        f"페이지 수: {index.metadata.page_count}",
        f"섹션 수: {len(index.sections)}",
        "",
        "---",
        "",
        toc or "(섹션을 찾을 수 없습니다)",
    ]
    return "\n".join(lines)


async def get_page(request: GetPageInput, manager: IndexManager | None = None) -> str:
    manager = manager or get_index_manager()
    info = get_document_info(request.document)

    index = await manager.get_index(info.id)
    page_count = len(index.page_texts)
    if request.page < 1 or request.page > page_count:
        raise InvalidPageError(info.id.value, request.page, page_count)

    return "\n".join(
        [f"# {info.description} - 페이지 {request.page}", "", index.page_texts[request.page - 1]]
    )


# --- Resources ---


class TocResource(BaseModel):
    uri: str
    name: str
    description: str
    mime_type: str = "text/plain"


TOC_RESOURCES: list[TocResource] = [
    TocResource(
        uri=f"spec://{doc_id.value}/toc",
        name=f"{info.description} 목차",
        description=f"{info.filename}의 목차",
    )
    for doc_id, info in DOCUMENTS.items()
]

TOC_URI_PATTERN = re.compile(r"^spec://([^/]+)/toc$")


async def get_toc_resource(uri: str, manager: IndexManager | None = None) -> str | None:
    """Render the depth-3 table of contents for a spec://<document>/toc URI.

    Returns None for URIs that do not name a known document.
    """
    match = TOC_URI_PATTERN.match(uri)
    if not match:
        return None

    try:
        doc_id = DocumentId(match.group(1))
    except ValueError:
        return None

    manager = manager or get_index_manager()
    index = await manager.get_index(doc_id)
    info = DOCUMENTS[doc_id]

    lines = [
        f"# {info.description}",
        f"파일: {info.filename}",
        f"페이지 수: {index.metadata.page_count}",
        f"인덱싱 시간: {index.metadata.indexed_at}",
        "",
        "## 목차",
        "",
        build_toc(index.sections, 3),
    ]
    return "\n".join(lines)
