"""OperatorRoleAssignment SQLAlchemy model for platform-level roles."""

from datetime import datetime

from sqlalchemy import Column, DateTime, String

from ..database import Base


class OperatorRoleAssignment(Base):
    """
    Explicit platform role (admin, user, guest) assigned to a caller.

    Callers without a row fall back to a derived default; rows are only
    written by an admin through assignCallerUserRole.
    """

    __tablename__ = "OperatorRoles"

    caller_id = Column(
        String(128),
        primary_key=True,
        nullable=False,
    )
    role = Column(
        String(20),
        nullable=False,
        index=True,
    )
    assigned_by = Column(
        String(128),
        nullable=False,
    )

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
        """String representation of OperatorRoleAssignment."""
        return f"<OperatorRoleAssignment(caller_id={self.caller_id}, role={self.role})>"
