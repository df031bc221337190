"""Private notes store: one free-text note per (room, caller)."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import RoomNote
from ..schemas.note import NOTE_MAX_LENGTH
from .auth_service import CallerId
from .errors import InvalidInputError
from .room_lock_service import room_locks

logger = logging.getLogger(__name__)


class NoteService:
    """
    Reads and writes private notes.

    Notes are only ever looked up by the caller's own id, so one caller can
    never read another's note. No room membership is required: a note stays
    readable after its owner leaves the room.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, caller_id: CallerId, room_id: int):
        result = await self.db.execute(
            select(RoomNote).where(
                RoomNote.room_id == room_id,
                RoomNote.caller_id == caller_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_note(self, caller_id: CallerId, room_id: int) -> str:
        """Return the caller's note for the room, or an empty string."""
        note = await self._get(caller_id, room_id)
        return note.content if note else ""

    async def save_note(self, caller_id: CallerId, room_id: int, content: str) -> None:
        """Overwrite the caller's note for the room."""
        if len(content) > NOTE_MAX_LENGTH:
            raise InvalidInputError(f"Note must be at most {NOTE_MAX_LENGTH} characters")

        async with room_locks.hold("note", room_id, caller_id):
            note = await self._get(caller_id, room_id)
            if note is None:
                note = RoomNote(room_id=room_id, caller_id=caller_id)
                self.db.add(note)

            note.content = content
            await self.db.commit()

        logger.debug(f"Note saved for caller {caller_id} in room {room_id}")


def get_note_service(db: AsyncSession) -> NoteService:
    """
    Factory function to create a NoteService instance.

    Args:
        db: SQLAlchemy async database session

    Returns:
        NoteService instance
    """
    return NoteService(db)
