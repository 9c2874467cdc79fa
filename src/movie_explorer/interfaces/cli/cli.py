from __future__ import annotations

import argparse
import asyncio
import shlex
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from movie_explorer.application.explorer import MovieExplorer
from movie_explorer.domain.entities.catalog import WatchlistEntry
from movie_explorer.domain.entities.errors import CatalogError
from movie_explorer.infrastructure.composition import build_explorer
from movie_explorer.infrastructure.config import (
    AppConfig,
    config_warnings,
    load_config,
)
from movie_explorer.infrastructure.logging.setup import configure_logging
from movie_explorer.interfaces.cli.render import (
    render_detail,
    render_detail_view,
    render_search,
    render_watchlist,
)

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_LOOKUP_FAILED = 1
EXIT_CONFIG_ERROR = 2

SHELL_HELP = """\
Commands:
  search TERM     start a new search
  next | prev     move one page forward/back
  page N          jump to page N
  open ID         show details for ID
  close           dismiss the details
  watch ID        toggle ID on the watchlist
  list            show the watchlist
  quit"""


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="movie-explorer",
        description="Search the OMDb catalog and keep a watchlist.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--api-key",
        default=None,
        help="OMDb API key (overrides MOVIE_EXPLORER_OMDB_API_KEY).",
    )
    parser.add_argument(
        "--storage",
        default=None,
        choices=["diskcache", "memory"],
        help="Override watchlist storage backend.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search titles by term.")
    search.add_argument("term")
    search.add_argument("--page", type=int, default=1)

    details = sub.add_parser("details", help="Show full details for an IMDb id.")
    details.add_argument("imdb_id")

    title = sub.add_parser("title", help="Look up a single title by name.")
    title.add_argument("title")

    watch = sub.add_parser("watch", help="Toggle an IMDb id on the watchlist.")
    watch.add_argument("imdb_id")
    watch.add_argument(
        "--title",
        default=None,
        help="Title to store; looked up in the catalog when omitted.",
    )

    sub.add_parser("watchlist", help="Show the watchlist.")
    sub.add_parser("shell", help="Interactive session.")

    return parser.parse_args(argv)


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.api_key:
        overrides["omdb_api_key"] = args.api_key
    if args.storage:
        overrides["storage_backend"] = args.storage
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_format:
        overrides["log_format"] = args.log_format
    return overrides


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------


async def _cmd_search(explorer: MovieExplorer, term: str, page: int) -> int:
    view = await explorer.submit_search(term)
    if page != 1 and view.error is None:
        view = await explorer.change_page(page)
    print(render_search(view, explorer.is_watched))
    return EXIT_LOOKUP_FAILED if view.error else EXIT_OK


async def _cmd_details(explorer: MovieExplorer, imdb_id: str) -> int:
    view = await explorer.select_item(imdb_id)
    print(render_detail_view(view))
    return EXIT_LOOKUP_FAILED if view.error else EXIT_OK


async def _cmd_title(explorer: MovieExplorer, title: str) -> int:
    try:
        record = await explorer.lookup_title(title)
    except CatalogError as e:
        print(f"Error: {e}")
        return EXIT_LOOKUP_FAILED
    print(render_detail(record))
    return EXIT_OK


async def _cmd_watch(explorer: MovieExplorer, imdb_id: str, title: str | None) -> int:
    if explorer.is_watched(imdb_id):
        entry = WatchlistEntry(imdb_id=imdb_id, title=title or "")
    elif title:
        entry = WatchlistEntry(imdb_id=imdb_id, title=title)
    else:
        view = await explorer.select_item(imdb_id)
        if view.record is None:
            print(render_detail_view(view))
            return EXIT_LOOKUP_FAILED
        entry = WatchlistEntry.from_detail(view.record)
        explorer.dismiss()

    entries = await explorer.toggle_watch(entry)
    state = "Added" if explorer.is_watched(imdb_id) else "Removed"
    print(f"{state} {imdb_id}.")
    print(render_watchlist(entries))
    return EXIT_OK


async def _shell(explorer: MovieExplorer) -> int:
    print(SHELL_HELP)
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            return EXIT_OK
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"Error: {e}")
            continue
        if not parts:
            continue
        cmd, rest = parts[0].lower(), parts[1:]

        if cmd in ("quit", "exit"):
            return EXIT_OK
        elif cmd == "search":
            view = await explorer.submit_search(" ".join(rest))
            print(render_search(view, explorer.is_watched))
        elif cmd in ("next", "prev"):
            step = 1 if cmd == "next" else -1
            view = await explorer.change_page(explorer.search_view().page + step)
            print(render_search(view, explorer.is_watched))
        elif cmd == "page" and len(rest) == 1 and rest[0].lstrip("-").isdigit():
            view = await explorer.change_page(int(rest[0]))
            print(render_search(view, explorer.is_watched))
        elif cmd == "open" and len(rest) == 1:
            print(render_detail_view(await explorer.select_item(rest[0])))
        elif cmd == "close":
            explorer.dismiss()
        elif cmd == "watch" and len(rest) == 1:
            await _cmd_watch(explorer, rest[0], _known_title(explorer, rest[0]))
        elif cmd == "list":
            print(render_watchlist(explorer.watchlist_view()))
        else:
            print(SHELL_HELP)


def _known_title(explorer: MovieExplorer, imdb_id: str) -> str | None:
    """Title of *imdb_id* if it is on the current page or selected."""
    for item in explorer.search_view().items:
        if item.imdb_id == imdb_id:
            return item.title
    record = explorer.detail_view().record
    if record is not None and record.imdb_id == imdb_id:
        return record.title
    return None


async def _run(config: AppConfig, args: argparse.Namespace) -> int:
    async with build_explorer(config) as explorer:
        if args.command == "search":
            return await _cmd_search(explorer, args.term, args.page)
        if args.command == "details":
            return await _cmd_details(explorer, args.imdb_id)
        if args.command == "title":
            return await _cmd_title(explorer, args.title)
        if args.command == "watch":
            return await _cmd_watch(explorer, args.imdb_id, args.title)
        if args.command == "watchlist":
            print(render_watchlist(explorer.watchlist_view()))
            return EXIT_OK
        return await _shell(explorer)


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, then runs one command.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    try:
        config = load_config(
            config_path=Path(args.config) if args.config else None,
            dotenv_path=Path(args.dotenv) if args.dotenv else None,
            cli_overrides=_cli_overrides(args),
        )
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(config)
    for event, context in config_warnings(config):
        log.warning(event, **context)

    return asyncio.run(_run(config, args))


if __name__ == "__main__":
    raise SystemExit(start())
