"""Data models for parsed documents and the indexes derived from them."""

from pydantic import BaseModel, ConfigDict

from ..documents import DocumentId


class ParsedPage(BaseModel):
    """One page of text as produced by the text source."""

    page_number: int  # 1-based
    lines: list[str]


class ParsedDocument(BaseModel):
    """A document decomposed into ordered pages of ordered lines."""

    filename: str
    content_hash: str
    page_count: int
    pages: list[ParsedPage]


class Section(BaseModel):
    """A numbered heading and the inclusive page range it covers."""

    model_config = ConfigDict(frozen=True)

    id: str  # dotted path, e.g. "2.1.3"
    title: str
    level: int
    start_page: int
    end_page: int


class Table(BaseModel):
    """A captioned table reduced to rows of cell strings."""

    model_config = ConfigDict(frozen=True)

    id: str  # "table-<caption number>"
    name: str
    page: int
    rows: tuple[tuple[str, ...], ...]


class IndexMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    content_hash: str
    indexed_at: str  # ISO-8601
    page_count: int


class DocumentIndex(BaseModel):
    """Everything derived from one document at one content hash."""

    model_config = ConfigDict(frozen=True)

    metadata: IndexMetadata
    sections: tuple[Section, ...]
    tables: tuple[Table, ...]
    page_texts: tuple[str, ...]  # page_texts[i] holds page i + 1


class SearchMatch(BaseModel):
    """One line of one page that contains a search query."""

    model_config = ConfigDict(frozen=True)

    document: DocumentId
    section: Section | None = None
    page: int
    context: str
