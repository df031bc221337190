"""RoomNote SQLAlchemy model for private per-room notes."""

from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, String, Text

from ..database import Base


class RoomNote(Base):
    """
    Private free-text note a caller keeps for a room.

    Keyed by (room_id, caller_id) and only ever returned to its owner.
    Notes are kept after their owner leaves the room.
    """

    __tablename__ = "RoomNotes"

    room_id = Column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )
    caller_id = Column(
        String(128),
        primary_key=True,
    )
    content = Column(
        Text,
        nullable=False,
        default="",
    )
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of RoomNote."""
        return f"<RoomNote(room_id={self.room_id}, caller_id={self.caller_id})>"
