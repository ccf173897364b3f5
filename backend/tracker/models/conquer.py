"""
Conquer Model

A conquer is a town changing owner. Both sides of the event carry the player
and the alliance, with their names denormalized at ingestion time.

"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tracker.db.session import Base


class Conquer(Base):
    __tablename__ = "conquers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server: Mapped[str] = mapped_column(String(32), nullable=False)
    time: Mapped[int] = mapped_column(Integer, nullable=False)

    town: Mapped[int | None] = mapped_column(Integer)
    town_name: Mapped[str | None] = mapped_column(String(255))
    points: Mapped[int | None] = mapped_column(Integer)

    # new owner
    newplayer: Mapped[int | None] = mapped_column(Integer)
    newplayer_name: Mapped[str | None] = mapped_column(String(255))
    newally: Mapped[int | None] = mapped_column(Integer, index=True)
    newally_name: Mapped[str | None] = mapped_column(String(255))

    # previous owner
    oldplayer: Mapped[int | None] = mapped_column(Integer)
    oldplayer_name: Mapped[str | None] = mapped_column(String(255))
    oldally: Mapped[int | None] = mapped_column(Integer, index=True)
    oldally_name: Mapped[str | None] = mapped_column(String(255))

    __table_args__ = (Index("ix_conquers_server_time", "server", "time"),)
