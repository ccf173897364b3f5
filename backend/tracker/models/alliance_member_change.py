"""
Alliance Member Change Model

Records a player leaving one alliance and/or joining another.
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tracker.db.session import Base


class AllianceMemberChange(Base):
    __tablename__ = "alliance_member_changes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    server: Mapped[str] = mapped_column(String(32), nullable=False)
    time: Mapped[int] = mapped_column(Integer, nullable=False)

    player: Mapped[int | None] = mapped_column(Integer)
    player_name: Mapped[str | None] = mapped_column(String(255))

    new_alliance: Mapped[int | None] = mapped_column(Integer, index=True)
    new_alliance_name: Mapped[str | None] = mapped_column(String(255))
    old_alliance: Mapped[int | None] = mapped_column(Integer, index=True)
    old_alliance_name: Mapped[str | None] = mapped_column(String(255))

    __table_args__ = (Index("ix_alliance_member_changes_server_time", "server", "time"),)
