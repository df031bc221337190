"""Profile SQLAlchemy model for per-caller display data."""

from datetime import datetime

from sqlalchemy import Column, DateTime, String

from ..database import Base


class Profile(Base):
    """
    Profile model holding a caller's public display data.

    One row per caller, created on first save and fully replaced on
    later saves. The role here is the in-room display role and has no
    bearing on authorization (see OperatorRoleAssignment).

    Attributes:
        caller_id: Identifier issued by the identity provider
        display_name: Name shown to other participants
        role: Display role (client, admin, consultant, engineer, analyst)
        created_at: Timestamp when the profile was first saved
        updated_at: Timestamp when the profile was last saved
    """

    __tablename__ = "Profiles"

    # Primary key - external caller id
    caller_id = Column(
        String(128),
        primary_key=True,
        nullable=False,
    )

    display_name = Column(
        String(32),
        nullable=False,
    )
    role = Column(
        String(20),
        nullable=False,
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Profile."""
        return f"<Profile(caller_id={self.caller_id}, display_name={self.display_name}, role={self.role})>"
