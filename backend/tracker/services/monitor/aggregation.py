from __future__ import annotations

"""
Aggregation of player update rows.

Input rows are plain dicts in query order (newest first). The output maps
each alliance id (as a string key) to one summary per player with the
deltas summed over the window.
"""

from typing import Any, Dict, Iterable, List, Mapping

DELTA_FIELDS = ("abp_delta", "dbp_delta", "towns_delta", "points_delta")


def to_int(value: Any) -> int:
    """Base-10 integer value of a delta; anything non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return 0


def clean_name(name: Any) -> str:
    """Undo driver quoting: "'Foo'" -> "Foo"."""
    if not name:
        return ""
    name = str(name)
    if name.startswith("'"):
        return name[1:-1]
    return name


def is_noise(row: Mapping[str, Any]) -> bool:
    """Rows that gained neither attack nor defence points are dropped."""
    return to_int(row.get("abp_delta")) <= 0 and to_int(row.get("dbp_delta")) <= 0


def alliance_key(alliance: Any) -> str:
    return "null" if alliance is None else str(alliance)


def summarize_player(rows: List[Mapping[str, Any]]) -> Dict[str, Any]:
    """Collapse all rows of one player into a single summary record."""
    first = rows[0]
    summary: Dict[str, Any] = {
        "id": first.get("id"),
        "server": first.get("server"),
        "name": clean_name(first.get("name")),
        "alliance": first.get("alliance"),
        "alliance_name": first.get("alliance_name") or "",
    }
    for field in DELTA_FIELDS:
        summary[field] = sum(to_int(r.get(field)) for r in rows)
    return summary


def aggregate_player_updates(
    rows: Iterable[Mapping[str, Any]],
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Group player update rows by alliance, then by player, and sum deltas.

    Args:
        rows: Update rows carrying `id`, `server`, `name`, `alliance`,
            `alliance_name` and the delta fields.

    Returns:
        Ordered mapping alliance key -> list of player summaries. Alliances
        and players appear in the order they are first seen.
    """
    by_alliance: Dict[str, Dict[Any, List[Mapping[str, Any]]]] = {}
    for row in rows:
        if is_noise(row):
            continue
        players = by_alliance.setdefault(alliance_key(row.get("alliance")), {})
        players.setdefault(row.get("id"), []).append(row)

    return {
        key: [summarize_player(player_rows) for player_rows in players.values()]
        for key, players in by_alliance.items()
    }
