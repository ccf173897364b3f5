"""
Alliance Model

This module defines the Alliance database model representing game alliances.
Player updates reference alliances loosely by id; there is no foreign key, so
a missing alliance row simply yields an empty name.

"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tracker.db.session import Base


class Alliance(Base):
    """
    Alliance model representing a game alliance.

    Attributes:
        id: Primary key, alliance identifier assigned by the game
        name: Alliance display name
    """

    __tablename__ = "alliances"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Alliance identifier assigned by the game",
    )
    name: Mapped[str] = mapped_column(
        String(255), index=True, comment="Alliance display name"
    )
