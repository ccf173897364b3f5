from __future__ import annotations

"""
Monitor Router

Read-only endpoints polled by the world monitor page:

1) GET /{server}/monitor/updates
   - Player battle point / town / point deltas, summed per player and
     grouped by alliance id.

2) GET /{server}/monitor/conquers
3) GET /{server}/monitor/allianceChanges
   - Two-sided alliance events. With `alliances` the events are grouped
     under every requested alliance id; without it the flat list is returned.

All three take `time` (epoch seconds of the previous poll, required) and
`alliances` (comma separated ids, optional).
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.core.config import settings
from tracker.db.session import get_db
from tracker.schemas.monitor import PlayerSummary
from tracker.services.monitor import MonitorService

router = APIRouter(prefix="/{server}/monitor", tags=["monitor"])

logger = logging.getLogger(__name__)


def get_monitor_service(db: Session = Depends(get_db)) -> MonitorService:
    return MonitorService(
        db, logger, window_seconds=settings.MONITOR_WINDOW_SECONDS
    )


@router.get("/updates", response_model=Dict[str, List[PlayerSummary]])
def player_updates(
    server: str,
    time: Optional[str] = None,
    alliances: Optional[str] = None,
    service: MonitorService = Depends(get_monitor_service),
):
    return service.player_updates(server, time, alliances)


@router.get("/conquers")
def conquers(
    server: str,
    time: Optional[str] = None,
    alliances: Optional[str] = None,
    service: MonitorService = Depends(get_monitor_service),
):
    return service.conquers(server, time, alliances)


@router.get("/allianceChanges")
def alliance_changes(
    server: str,
    time: Optional[str] = None,
    alliances: Optional[str] = None,
    service: MonitorService = Depends(get_monitor_service),
):
    return service.alliance_changes(server, time, alliances)
