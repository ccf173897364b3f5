"""
Monitor modules.

Public API is exposed from .api.
"""

from .aggregation import aggregate_player_updates
from .api import MonitorService
from .partition import partition_alliance_changes, partition_conquers
from .queries import parse_alliance_ids
from .window import resolve_time_window

__all__ = [
    "MonitorService",
    "aggregate_player_updates",
    "parse_alliance_ids",
    "partition_alliance_changes",
    "partition_conquers",
    "resolve_time_window",
]
