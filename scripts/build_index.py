#!/usr/bin/env python3
"""Build (or refresh) document indexes ahead of serving.

Usage:
    python scripts/build_index.py [document ...] [--docs-dir DIR] [--cache-dir DIR] [--sections N]

Builds each named document (all documents by default), persists the index,
and prints a summary for checking extraction quality.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hwp_spec_server.cache import IndexManager, IndexStore
from hwp_spec_server.documents import DOCUMENTS, DocumentId, resolve_document_id
from hwp_spec_server.errors import HwpSpecError, format_error_for_user
from hwp_spec_server.indexer import PdfTextSource, build_toc


async def build(manager: IndexManager, doc_ids: list[DocumentId], sections: int) -> int:
    failures = 0
    for doc_id in doc_ids:
        info = DOCUMENTS[doc_id]
        print(f"\n--- {doc_id.value}: {info.description} ---")
        try:
            index = await manager.get_index(doc_id)
        except HwpSpecError as e:
            print(f"  Error: {format_error_for_user(e)}")
            failures += 1
            continue

        print(f"File: {index.metadata.filename}")
        print(f"Hash: {index.metadata.content_hash}")
        print(f"Pages: {index.metadata.page_count}, Sections: {len(index.sections)}, Tables: {len(index.tables)}")

        if sections > 0:
            print()
            for line in build_toc(index.sections[:sections], 2).splitlines():
                print(f"  {line}")

        for table in index.tables[:5]:
            print(f"  [{table.id}] {table.name} (page {table.page}, {len(table.rows)} rows)")

    return failures


def main():
    parser = argparse.ArgumentParser(description="Build HWP spec indexes")
    parser.add_argument(
        "documents",
        nargs="*",
        help="Documents to build: " + ", ".join(d.value for d in DocumentId) + " (default: all)",
    )
    parser.add_argument("--docs-dir", default=None, help="Directory holding the PDFs")
    parser.add_argument("--cache-dir", default=None, help="Directory for persisted indexes")
    parser.add_argument(
        "--sections", type=int, default=20, help="Number of sections to display (default: 20)"
    )
    args = parser.parse_args()

    try:
        doc_ids = [resolve_document_id(d) for d in args.documents] or list(DocumentId)
    except HwpSpecError as e:
        parser.error(format_error_for_user(e))

    manager = IndexManager(
        source=PdfTextSource(args.docs_dir),
        store=IndexStore(args.cache_dir),
    )

    failures = asyncio.run(build(manager, doc_ids, args.sections))

    print("\n" + "=" * 80)
    print(f"Indexed {len(doc_ids) - failures} of {len(doc_ids)} documents.")
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
