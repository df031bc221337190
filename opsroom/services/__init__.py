"""Core services: profiles, access control, rooms, messages and notes."""

from .access_service import AccessService, get_access_service
from .errors import (
    CodeSpaceExhaustedError,
    InvalidInputError,
    NotFoundError,
    OpsRoomError,
    UnauthorizedError,
)
from .message_service import MessageService, get_message_service
from .note_service import NoteService, get_note_service
from .profile_service import ProfileService, get_profile_service
from .room_lock_service import RoomLockRegistry, room_locks
from .room_service import RoomService, get_room_service

__all__ = [
    "AccessService",
    "CodeSpaceExhaustedError",
    "InvalidInputError",
    "MessageService",
    "NoteService",
    "NotFoundError",
    "OpsRoomError",
    "ProfileService",
    "RoomLockRegistry",
    "RoomService",
    "UnauthorizedError",
    "get_access_service",
    "get_message_service",
    "get_note_service",
    "get_profile_service",
    "get_room_service",
    "room_locks",
]
