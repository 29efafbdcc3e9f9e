"""On-disk mirror of built document indexes."""

import os
import tempfile
import time
from pathlib import Path

from pydantic import ValidationError

from ..documents import DocumentId, resolve_document_id
from ..errors import CacheError
from ..indexer.models import DocumentIndex
from ..logger import logger


class IndexStore:
    """One JSON file per document, valid only for the hash stored inside it."""

    def __init__(self, cache_dir: str | Path | None = None):
        self.cache_dir = Path(
            cache_dir or os.getenv("HWP_SPEC_CACHE_DIR", "./.cache/index")
        )

    def path_for(self, document_id: str | DocumentId) -> Path:
        return self.cache_dir / f"{resolve_document_id(document_id).value}.json"

    def load(self, document_id: str | DocumentId, content_hash: str) -> DocumentIndex | None:
        """Return the stored index if it was built from content_hash.

        A missing, unreadable, or stale file is a miss; the next save
        overwrites it.
        """
        path = self.path_for(document_id)
        if not path.exists():
            return None

        start = time.perf_counter()
        try:
            index = DocumentIndex.model_validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warn("stored index unreadable", file_path=str(path), error=str(e))
            return None

        if index.metadata.content_hash != content_hash:
            logger.info(
                "stored index is stale",
                file_path=str(path),
                stored_hash=index.metadata.content_hash,
                current_hash=content_hash,
            )
            return None

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug("stored index loaded", file_path=str(path), duration_ms=round(duration_ms, 2))
        return index

    def save(self, document_id: str | DocumentId, index: DocumentIndex) -> Path:
        """Write the index, replacing any previous file atomically.

        Raises:
            CacheError: If the file cannot be written.
        """
        path = self.path_for(document_id)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(index.model_dump_json().encode("utf-8"))
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheError(f"save {path.name}", e) from e

        logger.debug("index saved", file_path=str(path))
        return path
