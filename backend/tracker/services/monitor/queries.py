"""
Query building for the monitor endpoints.

Every query filters on the game world and the resolved lower time bound.
The optional alliance filter is a plain `IN` for player updates and an
`IN` on either side of the event for conquers and member changes.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import Select, or_, select

from tracker.core.errors import InvalidParameter
from tracker.models import Alliance, AllianceMemberChange, Conquer, PlayerUpdate


def parse_alliance_ids(raw: Optional[str]) -> Optional[List[int]]:
    """
    Parse the comma separated `alliances` parameter.

    Blank segments are ignored and duplicates are dropped (first occurrence
    wins). Returns None when nothing was requested.

    Raises:
        InvalidParameter: an entry is not a base-10 integer.
    """
    if not raw:
        return None

    ids: List[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        digits = part[1:] if part.startswith("-") else part
        if not digits.isdecimal():
            raise InvalidParameter(f"Invalid alliance id: {part!r}")
        value = int(part, 10)
        if value not in ids:
            ids.append(value)

    return ids or None


def player_updates_query(
    server: str, since: int, alliance_ids: Optional[Sequence[int]] = None
) -> Select:
    """Player updates joined with the alliance name, newest first."""
    stmt = (
        select(PlayerUpdate, Alliance.name.label("alliance_name"))
        .outerjoin(Alliance, Alliance.id == PlayerUpdate.alliance)
        .where(PlayerUpdate.server == server, PlayerUpdate.time >= since)
    )
    if alliance_ids:
        stmt = stmt.where(PlayerUpdate.alliance.in_(alliance_ids))
    return stmt.order_by(PlayerUpdate.time.desc())


def conquers_query(
    server: str, since: int, alliance_ids: Optional[Sequence[int]] = None
) -> Select:
    stmt = select(Conquer).where(Conquer.server == server, Conquer.time >= since)
    if alliance_ids:
        stmt = stmt.where(
            or_(Conquer.newally.in_(alliance_ids), Conquer.oldally.in_(alliance_ids))
        )
    return stmt.order_by(Conquer.time.desc(), Conquer.id.desc())


def alliance_changes_query(
    server: str, since: int, alliance_ids: Optional[Sequence[int]] = None
) -> Select:
    stmt = select(AllianceMemberChange).where(
        AllianceMemberChange.server == server, AllianceMemberChange.time >= since
    )
    if alliance_ids:
        stmt = stmt.where(
            or_(
                AllianceMemberChange.new_alliance.in_(alliance_ids),
                AllianceMemberChange.old_alliance.in_(alliance_ids),
            )
        )
    return stmt.order_by(AllianceMemberChange.time.desc(), AllianceMemberChange.id.desc())
