"""Room registry: room creation, access codes and membership.

Invariants maintained here:
- room ids are allocated by the database sequence and never reused
- a room code belongs to at most one room (unique index + resampling)
- the creator is a participant when the room is created
- a caller is listed at most once per room (unique constraint)
- rooms are never deleted, even when the last participant leaves
"""

import logging
import secrets
from typing import Dict, List

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..models.profile import Profile
from ..models.room import Room, RoomParticipant
from ..schemas.profile import ProfileData
from ..schemas.room import ROOM_CODE_DIGITS, ParticipantResponse, RoomView
from .auth_service import CallerId
from .errors import CodeSpaceExhaustedError, InvalidInputError, NotFoundError, UnauthorizedError
from .room_lock_service import room_locks

logger = logging.getLogger(__name__)

ROOM_TITLE_MAX_LENGTH = 64
ROOM_DESCRIPTION_MAX_LENGTH = 256


def generate_room_code() -> int:
    """Draw a uniformly random seven-digit room code."""
    return secrets.randbelow(10**ROOM_CODE_DIGITS)


class RoomService:
    """
    Service class for the room registry.

    All mutations hold the room's key in the lock registry through commit;
    room creation holds the shared ("room-create",) key while it allocates a
    code.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the RoomService.

        Args:
            db: SQLAlchemy async database session
        """
        self.db = db

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def room_exists(self, room_id: int) -> bool:
        """Check whether a room with this id exists."""
        result = await self.db.execute(select(exists().where(Room.id == room_id)))
        return result.scalar() or False

    async def is_participant(self, caller_id: CallerId, room_id: int) -> bool:
        """
        Check if a caller is currently a participant of a room.

        Uses EXISTS pattern - avoids loading the membership row.
        """
        result = await self.db.execute(
            select(
                exists().where(
                    RoomParticipant.room_id == room_id,
                    RoomParticipant.caller_id == caller_id,
                )
            )
        )
        return result.scalar() or False

    async def _code_taken(self, code: int) -> bool:
        result = await self.db.execute(select(exists().where(Room.code == code)))
        return result.scalar() or False

    async def ensure_participant(self, caller_id: CallerId, room_id: int) -> None:
        """
        Verify the room exists and the caller is one of its participants.

        Raises:
            NotFoundError: If the room does not exist
            UnauthorizedError: If the caller is not a participant
        """
        if not await self.room_exists(room_id):
            raise NotFoundError(f"Room with ID {room_id} not found")

        if not await self.is_participant(caller_id, room_id):
            logger.warning(f"Caller {caller_id} is not a participant of room {room_id}")
            raise UnauthorizedError("Access denied. You are not a participant of this room.")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_room(
        self,
        caller_id: CallerId,
        title: str,
        description: str,
    ) -> int:
        """
        Create a room with a fresh access code and the caller as its only participant.

        Args:
            caller_id: Creator of the room
            title: Room title (1-64 characters)
            description: Room description (up to 256 characters)

        Returns:
            The new room id

        Raises:
            InvalidInputError: If the title is blank or a field is too long
            CodeSpaceExhaustedError: If no free code was found in the resample budget
        """
        if not title or not title.strip():
            raise InvalidInputError("Room title must not be blank")
        if len(title) > ROOM_TITLE_MAX_LENGTH:
            raise InvalidInputError(f"Room title must be at most {ROOM_TITLE_MAX_LENGTH} characters")
        if len(description) > ROOM_DESCRIPTION_MAX_LENGTH:
            raise InvalidInputError(
                f"Room description must be at most {ROOM_DESCRIPTION_MAX_LENGTH} characters"
            )

        async with room_locks.hold("room-create"):
            for attempt in range(1, settings.room_code_max_attempts + 1):
                code = generate_room_code()
                if await self._code_taken(code):
                    logger.debug(f"Room code collision on attempt {attempt}, resampling")
                    continue

                room = Room(
                    title=title,
                    description=description,
                    creator_id=caller_id,
                    code=code,
                )
                room.participants.append(RoomParticipant(caller_id=caller_id))
                self.db.add(room)

                try:
                    await self.db.commit()
                except IntegrityError:
                    # Another process took the code between check and insert
                    await self.db.rollback()
                    logger.warning(f"Room code {code} taken concurrently, resampling")
                    continue

                logger.info(f"Room {room.id} created by {caller_id}")
                return room.id

        logger.error(
            f"No free room code after {settings.room_code_max_attempts} attempts"
        )
        raise CodeSpaceExhaustedError("Could not allocate a room code, please retry")

    async def join_room(self, caller_id: CallerId, code: int) -> int:
        """
        Add the caller to the room with this access code.

        Joining a room the caller is already in changes nothing.

        Returns:
            The joined room's id

        Raises:
            NotFoundError: If no room has this code
        """
        result = await self.db.execute(select(Room.id).where(Room.code == code))
        room_id = result.scalar_one_or_none()
        if room_id is None:
            logger.warning(f"Caller {caller_id} tried to join with unknown room code")
            raise NotFoundError("No room with this code")

        async with room_locks.hold("room", room_id):
            if await self.is_participant(caller_id, room_id):
                return room_id

            self.db.add(RoomParticipant(room_id=room_id, caller_id=caller_id))
            try:
                await self.db.commit()
            except IntegrityError:
                # Joined concurrently through another process
                await self.db.rollback()
                return room_id

        logger.info(f"Caller {caller_id} joined room {room_id}")
        return room_id

    async def leave_room(self, caller_id: CallerId, room_id: int) -> None:
        """
        Remove the caller from a room.

        Leaving a room the caller is not in is a no-op. The room itself
        is kept even when nobody is left in it.

        Raises:
            NotFoundError: If the room does not exist
        """
        if not await self.room_exists(room_id):
            raise NotFoundError(f"Room with ID {room_id} not found")

        async with room_locks.hold("room", room_id):
            result = await self.db.execute(
                delete(RoomParticipant).where(
                    RoomParticipant.room_id == room_id,
                    RoomParticipant.caller_id == caller_id,
                )
            )
            await self.db.commit()

        if result.rowcount:
            logger.info(f"Caller {caller_id} left room {room_id}")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_my_rooms(self, caller_id: CallerId) -> List[RoomView]:
        """
        List every room the caller currently participates in.

        Rooms come back in creation order and participants in join order.
        A single statement reads rooms and memberships together, so a
        concurrent join or leave is either fully visible or not at all.
        """
        my_room_ids = (
            select(RoomParticipant.room_id)
            .where(RoomParticipant.caller_id == caller_id)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(
                Room.id,
                Room.title,
                Room.description,
                Room.creator_id,
                Room.code,
                RoomParticipant.caller_id,
            )
            .join(RoomParticipant, RoomParticipant.room_id == Room.id)
            .where(Room.id.in_(my_room_ids))
            .order_by(Room.id.asc(), RoomParticipant.id.asc())
        )

        rooms: Dict[int, RoomView] = {}
        for room_id, title, description, creator_id, code, participant_id in result.all():
            view = rooms.get(room_id)
            if view is None:
                view = RoomView(
                    id=room_id,
                    title=title,
                    description=description,
                    creator=creator_id,
                    code=code,
                )
                rooms[room_id] = view
            view.participants.append(participant_id)

        return list(rooms.values())

    async def get_room_participants(
        self,
        caller_id: CallerId,
        room_id: int,
    ) -> List[ParticipantResponse]:
        """
        List the participants of a room together with their profiles.

        Participants who never saved a profile are omitted.

        Raises:
            NotFoundError: If the room does not exist or the caller is not
                one of its participants
        """
        result = await self.db.execute(
            select(RoomParticipant.caller_id, Profile)
            .outerjoin(Profile, Profile.caller_id == RoomParticipant.caller_id)
            .where(RoomParticipant.room_id == room_id)
            .order_by(RoomParticipant.id.asc())
        )
        rows = result.all()

        if caller_id not in {participant_id for participant_id, _ in rows}:
            logger.warning(f"Caller {caller_id} denied participant list of room {room_id}")
            raise NotFoundError(f"Room with ID {room_id} not found")

        return [
            ParticipantResponse(
                caller_id=participant_id,
                profile=ProfileData.model_validate(profile),
            )
            for participant_id, profile in rows
            if profile is not None
        ]


def get_room_service(db: AsyncSession) -> RoomService:
    """
    Factory function to create a RoomService instance.

    Args:
        db: SQLAlchemy async database session

    Returns:
        RoomService instance
    """
    return RoomService(db)
