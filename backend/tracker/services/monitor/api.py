from __future__ import annotations

"""
Monitor service: the three read-only monitor queries.

The service owns no state beyond what it is constructed with: a DB session,
a logger and a clock. Each call resolves the time window, runs one query and
shapes the rows in memory.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.core.errors import DatastoreFailure
from tracker.schemas.monitor import AllianceChangeOut, ConquerOut, PlayerUpdateRow

from .aggregation import aggregate_player_updates
from .partition import Partitioned, partition_alliance_changes, partition_conquers
from .queries import (
    alliance_changes_query,
    conquers_query,
    parse_alliance_ids,
    player_updates_query,
)
from .window import DEFAULT_WINDOW_SECONDS, resolve_time_window


class MonitorService:
    def __init__(
        self,
        db: Session,
        logger: logging.Logger,
        *,
        clock: Callable[[], float] = time.time,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
    ) -> None:
        self.db = db
        self.logger = logger
        self.clock = clock
        self.window_seconds = window_seconds

    # ---------------------- helpers ----------------------

    def _since(self, raw_time: Optional[str]) -> int:
        return resolve_time_window(
            raw_time, self.clock(), max_age=self.window_seconds
        )

    def _fetch(self, stmt: Select, what: str) -> List[Any]:
        """Run one query; any driver error becomes a DatastoreFailure."""
        try:
            return list(self.db.execute(stmt).all())
        except SQLAlchemyError as e:
            self.logger.error("Failed to load %s: %s", what, e, exc_info=True)
            raise DatastoreFailure(f"Failed to load {what}.") from e

    # ---------------------- queries ----------------------

    def player_updates(
        self, server: str, raw_time: Optional[str], raw_alliances: Optional[str]
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Summed player deltas since `raw_time`, keyed by alliance id."""
        since = self._since(raw_time)
        alliance_ids = parse_alliance_ids(raw_alliances)

        result = self._fetch(
            player_updates_query(server, since, alliance_ids), "player updates"
        )
        rows = []
        for update, alliance_name in result:
            row = PlayerUpdateRow.model_validate(update).model_dump()
            row["alliance_name"] = alliance_name or ""
            rows.append(row)

        self.logger.debug(
            "player updates server=%s since=%d alliances=%s rows=%d",
            server,
            since,
            alliance_ids,
            len(rows),
        )
        return aggregate_player_updates(rows)

    def conquers(
        self, server: str, raw_time: Optional[str], raw_alliances: Optional[str]
    ) -> Partitioned:
        """Conquers since `raw_time`, grouped per requested alliance."""
        since = self._since(raw_time)
        alliance_ids = parse_alliance_ids(raw_alliances)

        result = self._fetch(conquers_query(server, since, alliance_ids), "conquers")
        rows = [ConquerOut.model_validate(r[0]).model_dump() for r in result]

        self.logger.debug(
            "conquers server=%s since=%d alliances=%s rows=%d",
            server,
            since,
            alliance_ids,
            len(rows),
        )
        return partition_conquers(rows, alliance_ids)

    def alliance_changes(
        self, server: str, raw_time: Optional[str], raw_alliances: Optional[str]
    ) -> Partitioned:
        """Alliance member changes since `raw_time`, grouped per requested alliance."""
        since = self._since(raw_time)
        alliance_ids = parse_alliance_ids(raw_alliances)

        result = self._fetch(
            alliance_changes_query(server, since, alliance_ids), "alliance changes"
        )
        rows = [AllianceChangeOut.model_validate(r[0]).model_dump() for r in result]

        self.logger.debug(
            "alliance changes server=%s since=%d alliances=%s rows=%d",
            server,
            since,
            alliance_ids,
            len(rows),
        )
        return partition_alliance_changes(rows, alliance_ids)
