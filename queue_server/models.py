from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey, JSON
from datetime import datetime
from .database import Base

PLAYERS_PER_TYPE = {"solo": 1, "duo": 2}

class Cabinet(Base):
    __tablename__ = "cabinets"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    queue_items = relationship(
        "QueueEntry",
        back_populates="cabinet",
        cascade="all,delete",
        passive_deletes=True,
        order_by=lambda: [QueueEntry.position, QueueEntry.id],
    )

class QueueEntry(Base):
    __tablename__ = "queue_items"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cabinet_id: Mapped[int] = mapped_column(ForeignKey("cabinets.id", ondelete="CASCADE"), index=True)
    type: Mapped[str] = mapped_column(String)  # "solo" or "duo"
    players: Mapped[list] = mapped_column(JSON, default=list)  # ["player1", "player2"]
    position: Mapped[int] = mapped_column(Integer, default=0)
    is_playing: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    cabinet = relationship("Cabinet", back_populates="queue_items")
