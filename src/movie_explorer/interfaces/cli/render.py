"""Plain-text rendering of the explorer read models."""

from __future__ import annotations

from collections.abc import Callable

from movie_explorer.application.explorer import DetailView, SearchView
from movie_explorer.domain.entities.catalog import DetailRecord, WatchlistEntry


def render_search(view: SearchView, is_watched: Callable[[str], bool]) -> str:
    if view.error:
        return f"Error: {view.error}"
    if view.loading:
        return "Loading..."
    if not view.term:
        return "Type a title to search."

    lines = [f'Results for "{view.term}" ({view.total_count} found)']
    for item in view.items:
        mark = "*" if is_watched(item.imdb_id) else " "
        year = f" ({item.year})" if item.year else ""
        lines.append(f" {mark} {item.imdb_id}  {item.title}{year}")
    if view.show_pager:
        lines.append(f"Page {view.page} of {view.page_count}")
    return "\n".join(lines)


def render_detail(record: DetailRecord) -> str:
    lines = [
        f"{record.title} ({record.year})",
        f"{record.rated} | {record.runtime} | {record.genre}".strip(" |"),
    ]
    if record.director:
        lines.append(f"Director: {record.director}")
    if record.actors:
        lines.append(f"Cast: {record.actors}")
    if record.plot:
        lines.append("")
        lines.append(record.plot)
    if record.ratings:
        lines.append("")
        lines.extend(f"{r.source}: {r.value}" for r in record.ratings)
    return "\n".join(lines)


def render_detail_view(view: DetailView) -> str:
    if view.error:
        return f"Error: {view.error}"
    if view.loading:
        return "Loading..."
    if view.record is None:
        return "Nothing selected."
    return render_detail(view.record)


def render_watchlist(entries: tuple[WatchlistEntry, ...]) -> str:
    if not entries:
        return "Your watchlist is empty."
    lines = [f"Watchlist ({len(entries)})"]
    for entry in entries:
        year = f" ({entry.year})" if entry.year else ""
        lines.append(f"  {entry.imdb_id}  {entry.title}{year}")
    return "\n".join(lines)
