"""
Player Update Model

One row per player per ingestion run. Each row carries the change (delta)
of attack/defence battle points, towns and points since the previous run.

"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tracker.db.session import Base


class PlayerUpdate(Base):
    """
    Player update model.

    Attributes:
        server: Game world identifier (e.g. "en101")
        id: Player identifier assigned by the game
        time: Ingestion time, epoch seconds
        name: Player display name (may be stored quoted, e.g. "'Foo'")
        alliance: Alliance id the player belonged to, if any
        abp_delta: Attack battle points gained
        dbp_delta: Defence battle points gained
        towns_delta: Towns gained or lost
        points_delta: Points gained or lost
    """

    __tablename__ = "player_updates"

    server: Mapped[str] = mapped_column(
        String(32), primary_key=True, comment="Game world identifier"
    )
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False, comment="Player identifier"
    )
    time: Mapped[int] = mapped_column(
        Integer, primary_key=True, comment="Ingestion time (epoch seconds)"
    )
    name: Mapped[str] = mapped_column(String(255), comment="Player display name")
    alliance: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Alliance id (no enforced relation)"
    )

    abp_delta: Mapped[int | None] = mapped_column(Integer, default=0)
    dbp_delta: Mapped[int | None] = mapped_column(Integer, default=0)
    towns_delta: Mapped[int | None] = mapped_column(Integer, default=0)
    points_delta: Mapped[int | None] = mapped_column(Integer, default=0)

    __table_args__ = (Index("ix_player_updates_server_time", "server", "time"),)
