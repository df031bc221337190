"""Message log: append-only, ordered chat history per room."""

import logging
import time
from typing import Callable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.message import Message
from ..schemas.message import MessageResponse
from .auth_service import CallerId
from .errors import InvalidInputError
from .room_lock_service import room_locks
from .room_service import RoomService

logger = logging.getLogger(__name__)


class MessageService:
    """
    Service class for appending to and reading room message logs.

    Sends to one room are serialized on the room's lock, and each new
    timestamp is clamped to the room's latest one, so the log's append
    order and timestamp order always agree even if the wall clock steps
    backwards.
    """

    def __init__(self, db: AsyncSession, clock: Callable[[], int] = time.time_ns):
        """
        Initialize the MessageService.

        Args:
            db: SQLAlchemy async database session
            clock: Source of the current time in nanoseconds
        """
        self.db = db
        self.clock = clock
        self.rooms = RoomService(db)

    async def _latest_timestamp(self, room_id: int) -> int:
        result = await self.db.execute(
            select(func.max(Message.timestamp)).where(Message.room_id == room_id)
        )
        return result.scalar() or 0

    async def send_message(self, caller_id: CallerId, room_id: int, content: str) -> None:
        """
        Append a message from the caller to the room's log.

        Args:
            caller_id: Sender of the message
            room_id: Target room
            content: Message text (must not be blank)

        Raises:
            NotFoundError: If the room does not exist
            UnauthorizedError: If the caller is not a participant
            InvalidInputError: If the content is blank
        """
        async with room_locks.hold("room", room_id):
            await self.rooms.ensure_participant(caller_id, room_id)
            if not content or not content.strip():
                raise InvalidInputError("Message content must not be blank")

            timestamp = max(self.clock(), await self._latest_timestamp(room_id))
            self.db.add(
                Message(
                    room_id=room_id,
                    sender_id=caller_id,
                    content=content,
                    timestamp=timestamp,
                )
            )
            await self.db.commit()

        logger.debug(f"Message appended to room {room_id} by {caller_id}")

    async def get_messages(self, caller_id: CallerId, room_id: int) -> List[MessageResponse]:
        """
        Return the room's full log, oldest first.

        Raises:
            NotFoundError: If the room does not exist
            UnauthorizedError: If the caller is not a participant
        """
        await self.rooms.ensure_participant(caller_id, room_id)

        result = await self.db.execute(
            select(Message.content, Message.sender_id, Message.timestamp)
            .where(Message.room_id == room_id)
            .order_by(Message.id.asc())
        )

        return [
            MessageResponse(content=content, sender=sender_id, timestamp=timestamp)
            for content, sender_id, timestamp in result.all()
        ]


def get_message_service(db: AsyncSession) -> MessageService:
    """
    Factory function to create a MessageService instance.

    Args:
        db: SQLAlchemy async database session

    Returns:
        MessageService instance
    """
    return MessageService(db)
