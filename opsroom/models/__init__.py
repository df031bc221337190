"""SQLAlchemy ORM models package."""

from .message import Message
from .note import RoomNote
from .operator_role import OperatorRoleAssignment
from .profile import Profile
from .room import Room, RoomParticipant

__all__ = [
    "Message",
    "OperatorRoleAssignment",
    "Profile",
    "Room",
    "RoomNote",
    "RoomParticipant",
]
