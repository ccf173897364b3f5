"""
ORM models for the tracker database.
"""

from .alliance import Alliance
from .alliance_member_change import AllianceMemberChange
from .conquer import Conquer
from .player_update import PlayerUpdate

__all__ = ["Alliance", "AllianceMemberChange", "Conquer", "PlayerUpdate"]
