"""Registry of the specification documents the server knows about."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .errors import DocumentNotFoundError


class DocumentId(str, Enum):
    HWP5 = "hwp5"
    HWP3 = "hwp3"
    FORMULA = "formula"
    CHART = "chart"
    DIST = "dist"


class DocumentInfo(BaseModel):
    """A known specification document."""

    model_config = ConfigDict(frozen=True)

    id: DocumentId
    filename: str
    description: str


DOCUMENTS: dict[DocumentId, DocumentInfo] = {
    DocumentId.HWP5: DocumentInfo(
        id=DocumentId.HWP5,
        filename="한글문서파일형식_5.0_revision1.3.pdf",
        description="HWP 5.0 규격",
    ),
    DocumentId.HWP3: DocumentInfo(
        id=DocumentId.HWP3,
        filename="한글문서파일형식3.0_HWPML_revision1.2.pdf",
        description="HWP 3.0 HWPML",
    ),
    DocumentId.FORMULA: DocumentInfo(
        id=DocumentId.FORMULA,
        filename="한글문서파일형식_수식_revision1.3.pdf",
        description="수식 규격",
    ),
    DocumentId.CHART: DocumentInfo(
        id=DocumentId.CHART,
        filename="한글문서파일형식_차트_revision1.2.pdf",
        description="차트 규격",
    ),
    DocumentId.DIST: DocumentInfo(
        id=DocumentId.DIST,
        filename="한글문서파일형식_배포용문서_revision1.2.pdf",
        description="배포용 문서",
    ),
}


def resolve_document_id(document_id: str | DocumentId) -> DocumentId:
    """Map a raw identifier onto the registry.

    Raises:
        DocumentNotFoundError: If the identifier is not a known document.
    """
    try:
        return DocumentId(document_id)
    except ValueError:
        raise DocumentNotFoundError(str(document_id)) from None


def get_document_info(document_id: str | DocumentId) -> DocumentInfo:
    return DOCUMENTS[resolve_document_id(document_id)]
