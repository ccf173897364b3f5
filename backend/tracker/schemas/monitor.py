"""
Monitor Schemas

This module defines Pydantic schemas for the monitor endpoints. ORM rows are
validated through these schemas before the in-memory aggregation so that
both the service and the responses work on plain dicts.

"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlayerUpdateRow(BaseModel):
    """A single player update joined with its alliance name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    server: str
    time: int
    name: Optional[str] = None
    alliance: Optional[int] = None
    alliance_name: Optional[str] = None
    abp_delta: Optional[int] = 0
    dbp_delta: Optional[int] = 0
    towns_delta: Optional[int] = 0
    points_delta: Optional[int] = 0


class PlayerSummary(BaseModel):
    """
    Summed deltas of one player over the requested window.

    Attributes:
        alliance_name: Empty string when the alliance is unknown
    """

    id: int
    server: str
    name: str
    alliance: Optional[int] = None
    alliance_name: str = Field(default="")
    abp_delta: int
    dbp_delta: int
    towns_delta: int
    points_delta: int


class ConquerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    server: str
    time: int
    town: Optional[int] = None
    town_name: Optional[str] = None
    points: Optional[int] = None
    newplayer: Optional[int] = None
    newplayer_name: Optional[str] = None
    newally: Optional[int] = None
    newally_name: Optional[str] = None
    oldplayer: Optional[int] = None
    oldplayer_name: Optional[str] = None
    oldally: Optional[int] = None
    oldally_name: Optional[str] = None


class AllianceChangeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    server: str
    time: int
    player: Optional[int] = None
    player_name: Optional[str] = None
    new_alliance: Optional[int] = None
    new_alliance_name: Optional[str] = None
    old_alliance: Optional[int] = None
    old_alliance_name: Optional[str] = None
