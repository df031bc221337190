"""Room and RoomParticipant SQLAlchemy models."""

from datetime import datetime

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer, "sqlite")


class Room(Base):
    """
    Room model representing a code-protected chat room.

    Attributes:
        id: Monotonic identifier allocated by the database sequence
        title: Room title
        description: Free-text description
        creator_id: Caller who created the room (always a participant at creation)
        code: Seven-digit access code, unique among all rooms
        created_at: Timestamp when the room was created
    """

    __tablename__ = "Rooms"

    # Primary key - autoincrement
    id = Column(
        IdType,
        primary_key=True,
        autoincrement=True,
    )

    title = Column(
        String(64),
        nullable=False,
    )
    description = Column(
        String(256),
        nullable=False,
        default="",
    )
    creator_id = Column(
        String(128),
        nullable=False,
        index=True,
    )

    # Unique index doubles as the code -> room lookup
    code = Column(
        Integer,
        nullable=False,
        unique=True,
        index=True,
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    participants = relationship(
        "RoomParticipant",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="RoomParticipant.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """String representation of Room."""
        return f"<Room(id={self.id}, title={self.title[:30] if self.title else ''}, code={self.code})>"


class RoomParticipant(Base):
    """
    Membership of a caller in a room.

    The surrogate id records join order; (room_id, caller_id) is unique so a
    caller appears at most once per room.
    """

    __tablename__ = "RoomParticipants"
    __table_args__ = (
        UniqueConstraint("room_id", "caller_id", name="uq_room_participant"),
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
        index=True,
    )
    caller_id = Column(
        String(128),
        nullable=False,
        index=True,
    )
    joined_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    room = relationship(
        "Room",
        back_populates="participants",
    )

    def __repr__(self) -> str:
        """String representation of RoomParticipant."""
        return f"<RoomParticipant(room_id={self.room_id}, caller_id={self.caller_id})>"
