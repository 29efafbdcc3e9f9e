"""Shared fixtures for the indexer and cache tests."""

import asyncio

import pytest

from hwp_spec_server.documents import DocumentId
from hwp_spec_server.errors import SourceUnavailableError
from hwp_spec_server.indexer import ParsedDocument, ParsedPage


def build_document(
    pages: list[list[str]],
    content_hash: str = "abc123",
    filename: str = "test.pdf",
) -> ParsedDocument:
    return ParsedDocument(
        filename=filename,
        content_hash=content_hash,
        page_count=len(pages),
        pages=[
            ParsedPage(page_number=i, lines=lines) for i, lines in enumerate(pages, start=1)
        ],
    )


class FakeTextSource:
    """In-memory text source that counts how often it is asked for work."""

    def __init__(self, documents: dict[DocumentId, ParsedDocument], delay: float = 0.0):
        self.documents = dict(documents)
        self.delay = delay
        self.fail_parse = False
        self.hash_calls = 0
        self.parse_calls = 0

    def _get(self, document_id: DocumentId) -> ParsedDocument:
        if document_id not in self.documents:
            raise SourceUnavailableError(f"{document_id.value}.pdf")
        return self.documents[document_id]

    async def get_content_hash(self, document_id: DocumentId) -> str:
        self.hash_calls += 1
        return self._get(document_id).content_hash

    async def get_parsed_document(self, document_id: DocumentId) -> ParsedDocument:
        self.parse_calls += 1
        await asyncio.sleep(self.delay)
        if self.fail_parse:
            raise SourceUnavailableError(f"{document_id.value}.pdf")
        return self._get(document_id)


@pytest.fixture
def make_document():
    """Factory for ParsedDocument objects from lists of page lines."""
    return build_document


@pytest.fixture
def fake_source_cls():
    return FakeTextSource


@pytest.fixture
def spec_document() -> ParsedDocument:
    """A small document with nested sections and one table."""
    return build_document(
        [
            ["HWP 문서 형식", "1. 소개", "이 문서는 HWP 파일 형식을 설명한다."],
            [
                "1.1 개요",
                "FileHeader 스트림은 문서의 시그니처를 담는다.",
                "표 1: 파일 인식 정보",
                "자료형  길이  설명",
                "BYTE array[32]  32  signature",
                "DWORD  4  버전",
            ],
            ["2. 파일 구조", "2.1 스토리지", "FileHeader 다음에 DocInfo 가 온다."],
            ["2.1.1 문서 정보", "DocInfo 스트림"],
        ],
        content_hash="hash-v1",
        filename="hwp5.pdf",
    )
