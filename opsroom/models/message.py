"""Message SQLAlchemy model for the per-room chat log."""

from sqlalchemy import BigInteger, Column, ForeignKey, Index, String, Text

from ..database import Base
from .room import IdType


class Message(Base):
    """
    Chat message appended to a room's log.

    Messages are immutable once written. The autoincrement id fixes append
    order; timestamp is nanoseconds since the epoch and never decreases
    within a room.

    Attributes:
        id: Append sequence number
        room_id: FK to the room the message belongs to
        sender_id: Caller who sent the message
        content: Message text
        timestamp: Send time in nanoseconds
    """

    __tablename__ = "Messages"
    __table_args__ = (
        Index("ix_messages_room_id_id", "room_id", "id"),
    )

    id = Column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )
    room_id = Column(
        IdType,
        ForeignKey("Rooms.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id = Column(
        String(128),
        nullable=False,
    )
    content = Column(
        Text,
        nullable=False,
    )
    timestamp = Column(
        BigInteger,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Message."""
        return f"<Message(id={self.id}, room_id={self.room_id}, sender_id={self.sender_id})>"
