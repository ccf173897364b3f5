from __future__ import annotations

"""
Partitioning of two-sided alliance events (conquers, member changes).

Each event has a "new" and an "old" alliance. When the client asks for a
list of alliances, events are re-grouped under every requested id they
touch, and annotated with the name of the alliance on the matching side.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .aggregation import to_int

Partitioned = Union[Dict[str, List[Dict[str, Any]]], List[Dict[str, Any]]]


def _side_id(value: Any) -> Optional[int]:
    return None if value is None else to_int(value)


def partition_by_alliance(
    rows: Sequence[Mapping[str, Any]],
    alliance_ids: Optional[Sequence[int]],
    *,
    new_key: str,
    old_key: str,
    new_name_key: str,
    old_name_key: str,
) -> Partitioned:
    """
    Group event rows under each requested alliance id.

    Args:
        rows: Event rows as dicts.
        alliance_ids: Requested ids, in request order. Falsy means no filter.
        new_key / old_key: Columns holding the alliance id of each side.
        new_name_key / old_name_key: Columns holding the matching names.

    Returns:
        The rows unchanged (as a list) when no ids were requested, otherwise
        a mapping str(id) -> annotated copies. Ids without a single matching
        row are left out.
    """
    if not alliance_ids:
        return [dict(r) for r in rows]

    out: Dict[str, List[Dict[str, Any]]] = {}
    for alliance_id in alliance_ids:
        matched: List[Dict[str, Any]] = []
        for row in rows:
            new_side = _side_id(row.get(new_key))
            old_side = _side_id(row.get(old_key))
            if alliance_id not in (new_side, old_side):
                continue
            item = dict(row)
            item["alliance_name"] = (
                row.get(new_name_key) if new_side == alliance_id else row.get(old_name_key)
            )
            matched.append(item)

        if matched:
            out[str(alliance_id)] = matched

    return out


def partition_conquers(
    rows: Sequence[Mapping[str, Any]], alliance_ids: Optional[Sequence[int]]
) -> Partitioned:
    return partition_by_alliance(
        rows,
        alliance_ids,
        new_key="newally",
        old_key="oldally",
        new_name_key="newally_name",
        old_name_key="oldally_name",
    )


def partition_alliance_changes(
    rows: Sequence[Mapping[str, Any]], alliance_ids: Optional[Sequence[int]]
) -> Partitioned:
    return partition_by_alliance(
        rows,
        alliance_ids,
        new_key="new_alliance",
        old_key="old_alliance",
        new_name_key="new_alliance_name",
        old_name_key="old_alliance_name",
    )
