"""Entry point for the HWP spec index server."""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="HWP spec index server")
    parser.add_argument(
        "--docs-dir",
        default=None,
        help="Directory holding the specification PDFs. Overrides HWP_SPEC_DOCS_DIR.",
    )
    parser.add_argument(
        "--cache-dir",
        default=None,
        help="Directory for persisted indexes. Overrides HWP_SPEC_CACHE_DIR.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        default=None,
        help="Minimum log level (default: INFO). Overrides LOG_LEVEL.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    args = parser.parse_args()

    if args.docs_dir:
        os.environ["HWP_SPEC_DOCS_DIR"] = args.docs_dir
    if args.cache_dir:
        os.environ["HWP_SPEC_CACHE_DIR"] = args.cache_dir
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level

    from hwp_spec_server.server import app

    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
