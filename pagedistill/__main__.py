"""CLI entry point: python -m pagedistill {serve,extract,distill} [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pagedistill.config import LOG_LEVELS, Settings
from pagedistill.errors import DistillError

logger = logging.getLogger(__name__)


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", metavar="URL", help="Page to fetch and extract")
    source.add_argument("--file", metavar="PATH", help="Local HTML file to extract")
    parser.add_argument("--base-url", default="", metavar="URL",
                        help="Base URL for resolving relative image links in --file input")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagedistill",
        description="Extract page content and distill it into typed UI components.",
    )
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS,
                        metavar="{DEBUG,INFO,WARNING,ERROR,CRITICAL}",
                        help="Logging level (default: LOG_LEVEL env or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST env or 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None,
                       help="Listening port (default: PORT env or 3000)")

    extract = sub.add_parser("extract", help="Print the content items of a page as JSON")
    _add_source_args(extract)
    extract.add_argument("--table", action="store_true", default=False,
                         help="Render the items as a table instead of JSON")

    distill = sub.add_parser("distill", help="Distill a page into components (needs a backend key)")
    _add_source_args(distill)
    distill.add_argument("--model", default=None, help="Backend model identifier")

    return parser


def _load_items(args: argparse.Namespace, user_agent: str) -> list[Any]:
    from pagedistill.errors import NoContentError
    from pagedistill.extractors import extract_items
    from pagedistill.query import extract_url

    if args.url:
        return extract_url(args.url, user_agent=user_agent)

    html = Path(args.file).read_text(encoding="utf-8", errors="replace")
    items = extract_items(html, base_url=args.base_url)
    if not items:
        raise NoContentError(f"No extractable content found in {args.file}")
    return items


def _print_items_table(items: list[Any]) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    tbl = Table(
        title=f"[bold green]Extracted Items ({len(items)})[/bold green]",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
    )
    tbl.add_column("#", style="dim", justify="right", width=4, no_wrap=True)
    tbl.add_column("Type", style="cyan", width=6, no_wrap=True)
    tbl.add_column("Content", max_width=100, no_wrap=True)
    for i, item in enumerate(items, 1):
        value = item.content if item.type == "text" else item.src
        tbl.add_row(str(i), item.type, value[:97])
    Console().print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except DistillError as exc:
        print(f"ERROR: {exc.message}", file=sys.stderr)
        return 1

    log_level = args.log_level or settings.log_level
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        from pagedistill.server import create_app

        host = args.host or settings.host
        port = args.port or settings.port
        logger.info("Server listening on %s:%d", host, port)
        uvicorn.run(create_app(settings), host=host, port=port, log_level=log_level.lower())
        return 0

    try:
        items = _load_items(args, settings.user_agent)
        if args.command == "extract":
            if args.table:
                _print_items_table(items)
            else:
                print(json.dumps([item.model_dump() for item in items], indent=2, ensure_ascii=False))
            return 0

        from pagedistill.backend import get_backend
        from pagedistill.components import dump_result
        from pagedistill.pipeline import distill_items

        result = distill_items(
            items,
            backend=get_backend(settings),
            model=args.model,
            default_model=settings.default_model,
        )
        print(json.dumps(dump_result(result), indent=2, ensure_ascii=False))
        return 0
    except DistillError as exc:
        print(f"ERROR: {exc.message}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
