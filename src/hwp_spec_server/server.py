"""FastAPI REST API exposing the HWP specification index queries."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import tools
from .cache import get_index_manager
from .documents import DOCUMENTS, get_document_info
from .errors import (
    DocumentNotFoundError,
    HwpSpecError,
    InvalidPageError,
    SourceUnavailableError,
    format_error_for_user,
)
from .logger import logger

# Prefix of every rendered error message
ERROR_PREFIX = "오류"


# --- Request/Response Models ---


class ToolResponse(BaseModel):
    text: str


class DocumentResponse(BaseModel):
    id: str
    filename: str
    description: str
    indexed: bool = False


class ResourceListResponse(BaseModel):
    resources: list[tools.TocResource]


class ResourceResponse(BaseModel):
    uri: str
    mime_type: str = "text/plain"
    text: str


class HealthResponse(BaseModel):
    status: str
    checks: dict[str, bool] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    code: str
    message: str


# --- App ---


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    manager = get_index_manager()
    logger.info(
        "starting server",
        docs_dir=str(getattr(manager.source, "docs_dir", "")),
        cache_dir=str(getattr(manager.store, "cache_dir", "")),
    )

    yield

    logger.info("server shutdown")


app = FastAPI(
    title="HWP Spec Index API",
    description="Section, table, and full-text lookups over the HWP format specifications",
    version="0.1.0",
    lifespan=lifespan,
)


# --- Exception Handlers ---


def _error_response(status_code: int, exc: HwpSpecError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            code=exc.code,
            message=f"{ERROR_PREFIX}: {format_error_for_user(exc)}",
        ).model_dump(),
    )


@app.exception_handler(HwpSpecError)
async def spec_error_handler(request: Request, exc: HwpSpecError):
    if isinstance(exc, DocumentNotFoundError):
        status_code = 404
    elif isinstance(exc, InvalidPageError):
        status_code = 400
    elif isinstance(exc, SourceUnavailableError):
        status_code = 503
    else:
        status_code = 500
    logger.warn("request failed", path=request.url.path, code=exc.code, error=exc.message)
    return _error_response(status_code, exc)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("unexpected error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            code="INTERNAL_ERROR",
            message=f"{ERROR_PREFIX}: 내부 오류가 발생했습니다",
        ).model_dump(),
    )


# --- Health Endpoints ---


@app.get("/health", response_model=HealthResponse)
def health():
    """Liveness check."""
    return HealthResponse(status="healthy")


# --- Document Endpoints ---


@app.get("/api/v1/documents", response_model=list[DocumentResponse])
def list_documents():
    """List the known specification documents."""
    manager = get_index_manager()
    return [
        DocumentResponse(
            id=doc_id.value,
            filename=info.filename,
            description=info.description,
            indexed=manager.cached_index(doc_id) is not None,
        )
        for doc_id, info in DOCUMENTS.items()
    ]


# --- Tool Endpoints ---


@app.post("/api/v1/tools/search_spec", response_model=ToolResponse)
async def search_spec(request: tools.SearchSpecInput):
    """Keyword search across one or all documents."""
    return ToolResponse(text=await tools.search_spec(request))


@app.post("/api/v1/tools/get_section", response_model=ToolResponse)
async def get_section(request: tools.GetSectionInput):
    """Section content by id or title."""
    return ToolResponse(text=await tools.get_section(request))


@app.post("/api/v1/tools/get_table", response_model=ToolResponse)
async def get_table(request: tools.GetTableInput):
    """Table by id, number, or name."""
    return ToolResponse(text=await tools.get_table(request))


@app.post("/api/v1/tools/list_sections", response_model=ToolResponse)
async def list_sections(request: tools.ListSectionsInput):
    """Table of contents to a given depth."""
    return ToolResponse(text=await tools.list_sections(request))


@app.post("/api/v1/tools/get_page", response_model=ToolResponse)
async def get_page(request: tools.GetPageInput):
    """Raw text of a single page."""
    return ToolResponse(text=await tools.get_page(request))


# --- Resource Endpoints ---


@app.get("/api/v1/resources", response_model=ResourceListResponse)
def list_resources():
    return ResourceListResponse(resources=tools.TOC_RESOURCES)


@app.get("/api/v1/resources/toc/{document}", response_model=ResourceResponse)
async def read_toc_resource(document: str):
    info = get_document_info(document)
    uri = f"spec://{info.id.value}/toc"
    text = await tools.get_toc_resource(uri)
    if text is None:
        raise HTTPException(status_code=404, detail=f"Unknown resource: {uri}")
    return ResourceResponse(uri=uri, text=text)
