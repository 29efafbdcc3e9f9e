"""Index cache: builds, persists, and queries per-document indexes."""

import asyncio
import time
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Protocol

from ..documents import DocumentId, resolve_document_id
from ..errors import CacheError, SourceUnavailableError
from ..indexer.models import (
    DocumentIndex,
    IndexMetadata,
    ParsedDocument,
    SearchMatch,
    Section,
    Table,
)
from ..indexer.pdf_parser import PdfTextSource
from ..indexer.section_extractor import (
    extract_sections,
    find_section_by_id_or_title,
    get_section_content,
)
from ..indexer.table_extractor import extract_tables, find_table_by_name_or_id
from ..logger import clear_context, logger, set_context
from .index_store import IndexStore

# Characters kept on each side of a hit in a search context
CONTEXT_CHARS = 80


class TextSource(Protocol):
    async def get_content_hash(self, document_id: DocumentId) -> str: ...

    async def get_parsed_document(self, document_id: DocumentId) -> ParsedDocument: ...


def build_document_index(parsed: ParsedDocument) -> DocumentIndex:
    """Run both extractors over a parsed document and assemble the index."""
    return DocumentIndex(
        metadata=IndexMetadata(
            filename=parsed.filename,
            content_hash=parsed.content_hash,
            indexed_at=datetime.now(timezone.utc).isoformat(),
            page_count=parsed.page_count,
        ),
        sections=tuple(extract_sections(parsed)),
        tables=tuple(extract_tables(parsed)),
        page_texts=tuple("\n".join(page.lines) for page in parsed.pages),
    )


def find_owning_section(sections: Sequence[Section], page: int) -> Section | None:
    """Return the last section in document order whose range contains page."""
    for section in reversed(sections):
        if section.start_page <= page <= section.end_page:
            return section
    return None


def make_context(line: str, position: int, length: int) -> str:
    """Clip a line to CONTEXT_CHARS on each side of a hit."""
    start = max(0, position - CONTEXT_CHARS)
    end = min(len(line), position + length + CONTEXT_CHARS)
    context = line[start:end].strip()
    if start > 0:
        context = "..." + context
    if end < len(line):
        context = context + "..."
    return context


def search_index(
    document_id: DocumentId, index: DocumentIndex, query: str
) -> list[SearchMatch]:
    """Case-insensitive substring search, one match per matching line."""
    needle = query.lower()
    matches = []

    for page_number, text in enumerate(index.page_texts, start=1):
        if needle not in text.lower():
            continue
        section = find_owning_section(index.sections, page_number)
        for line in text.split("\n"):
            position = line.lower().find(needle)
            if position < 0:
                continue
            matches.append(
                SearchMatch(
                    document=document_id,
                    section=section,
                    page=page_number,
                    context=make_context(line, position, len(needle)),
                )
            )

    return matches


class IndexManager:
    """Process-wide owner of document indexes.

    Each identifier maps to at most one built index (the one matching the
    source's current content hash) and at most one in-flight build. Callers
    arriving while a build runs await that same build.
    """

    def __init__(self, source: TextSource, store: IndexStore | None = None):
        self.source = source
        self.store = store
        self._indexes: dict[DocumentId, DocumentIndex] = {}
        self._in_flight: dict[DocumentId, asyncio.Task] = {}

    def cached_index(self, document_id: str | DocumentId) -> DocumentIndex | None:
        """Return the in-memory index without probing the source."""
        return self._indexes.get(resolve_document_id(document_id))

    async def get_index(self, document_id: str | DocumentId) -> DocumentIndex:
        """Return the index for a document, building it if the content changed.

        Raises:
            DocumentNotFoundError: If the identifier is unknown.
            SourceUnavailableError: If the source cannot be read; the cached
                entry is left as it was.
        """
        doc_id = resolve_document_id(document_id)

        task = self._in_flight.get(doc_id)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._load_or_build(doc_id))
            self._in_flight[doc_id] = task
            task.add_done_callback(lambda t, d=doc_id: self._clear_in_flight(d, t))
        else:
            logger.debug("joining in-flight build", document_id=doc_id.value)

        return await asyncio.shield(task)

    def _clear_in_flight(self, doc_id: DocumentId, task: asyncio.Task) -> None:
        if self._in_flight.get(doc_id) is task:
            del self._in_flight[doc_id]

    async def _load_or_build(self, doc_id: DocumentId) -> DocumentIndex:
        set_context(document_id=doc_id.value)

        try:
            content_hash = await self.source.get_content_hash(doc_id)

            cached = self._indexes.get(doc_id)
            if cached is not None and cached.metadata.content_hash == content_hash:
                logger.debug("index cache hit", content_hash=content_hash)
                return cached

            if self.store is not None:
                stored = await asyncio.to_thread(self.store.load, doc_id, content_hash)
                if stored is not None:
                    logger.info("index loaded from store", content_hash=content_hash)
                    self._indexes[doc_id] = stored
                    return stored

            start = time.perf_counter()
            logger.info("building index", content_hash=content_hash)

            parsed = await self.source.get_parsed_document(doc_id)
            index = build_document_index(parsed)
            self._indexes[doc_id] = index

            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "index built",
                sections_count=len(index.sections),
                tables_count=len(index.tables),
                page_count=index.metadata.page_count,
                duration_ms=round(duration_ms, 2),
            )

            if self.store is not None:
                try:
                    await asyncio.to_thread(self.store.save, doc_id, index)
                except CacheError as e:
                    logger.warn("index not persisted", error=e.message)

            return index
        finally:
            clear_context()

    async def get_section_content(
        self, document_id: str | DocumentId, section: Section
    ) -> str:
        index = await self.get_index(document_id)
        return get_section_content(index.page_texts, section)

    async def find_section(self, document_id: str | DocumentId, query: str) -> Section | None:
        index = await self.get_index(document_id)
        return find_section_by_id_or_title(index.sections, query)

    async def find_table(self, document_id: str | DocumentId, query: str) -> Table | None:
        index = await self.get_index(document_id)
        return find_table_by_name_or_id(index.tables, query)

    async def search(
        self, query: str, document_id: str | DocumentId | None = None
    ) -> list[SearchMatch]:
        """Search one document, or every known document in registry order.

        When searching every document, documents whose source cannot be
        read are skipped so the rest still answer.
        """
        if not query.strip():
            return []

        if document_id is not None:
            doc_id = resolve_document_id(document_id)
            return search_index(doc_id, await self.get_index(doc_id), query)

        doc_ids = list(DocumentId)
        results = await asyncio.gather(
            *(self.get_index(doc_id) for doc_id in doc_ids), return_exceptions=True
        )

        matches: list[SearchMatch] = []
        for doc_id, result in zip(doc_ids, results):
            if isinstance(result, SourceUnavailableError):
                logger.warn("skipping document in search", document_id=doc_id.value, error=result.message)
                continue
            if isinstance(result, BaseException):
                raise result
            matches.extend(search_index(doc_id, result, query))

        return matches


_index_manager: IndexManager | None = None


def get_index_manager() -> IndexManager:
    """Lazy initialization of the process-wide index manager."""
    global _index_manager
    if _index_manager is None:
        _index_manager = IndexManager(source=PdfTextSource(), store=IndexStore())
    return _index_manager


def set_index_manager(manager: IndexManager | None) -> None:
    """Replace the process-wide manager (None resets to lazy creation)."""
    global _index_manager
    _index_manager = manager
