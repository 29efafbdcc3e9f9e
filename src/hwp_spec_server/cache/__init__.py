from .index_manager import (
    IndexManager,
    TextSource,
    build_document_index,
    find_owning_section,
    get_index_manager,
    search_index,
    set_index_manager,
)
from .index_store import IndexStore

__all__ = [
    "IndexManager",
    "IndexStore",
    "TextSource",
    "build_document_index",
    "find_owning_section",
    "get_index_manager",
    "search_index",
    "set_index_manager",
]
