"""Room API endpoints.

Rooms are joined by their seven-digit access code and left by id.
All endpoints require authentication.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.room import ParticipantResponse, RoomCreate, RoomCreated, RoomJoin, RoomView
from ..services.auth_service import CallerId, get_current_caller
from ..services.room_service import get_room_service

router = APIRouter(prefix="/api/rooms", tags=["Rooms"])


@router.get(
    "",
    response_model=List[RoomView],
    summary="List the caller's rooms",
    description="Get every room the caller currently participates in.",
    responses={
        200: {"description": "List of rooms retrieved successfully"},
        401: {"description": "Not authenticated"},
    },
)
async def get_my_rooms(
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> List[RoomView]:
    """
    List the caller's rooms in creation order.

    Each room carries its access code (raw and zero-padded) and its
    participants in join order.
    """
    return await get_room_service(db).get_my_rooms(caller_id)


@router.post(
    "",
    response_model=RoomCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new room",
    responses={
        201: {"description": "Room created successfully"},
        401: {"description": "Not authenticated"},
        422: {"description": "Validation error"},
        503: {"description": "No room code available, retry"},
    },
)
async def create_room(
    room_data: RoomCreate,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> RoomCreated:
    """
    Create a new room.

    - **title**: Room title (required, 1-64 characters)
    - **description**: Room description (optional, up to 256 characters)

    The caller becomes the creator and first participant.
    """
    room_id = await get_room_service(db).create_room(
        caller_id, room_data.title, room_data.description
    )
    return RoomCreated(id=room_id)


@router.post(
    "/join",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Join a room by access code",
    responses={
        204: {"description": "Joined (or already a participant)"},
        401: {"description": "Not authenticated"},
        404: {"description": "No room with this code"},
    },
)
async def join_room(
    body: RoomJoin,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> None:
    """Join the room with the given code. Re-joining is a no-op."""
    await get_room_service(db).join_room(caller_id, body.code)


@router.post(
    "/{room_id}/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Leave a room",
    responses={
        204: {"description": "Left (or was not a participant)"},
        401: {"description": "Not authenticated"},
        404: {"description": "Room not found"},
    },
)
async def leave_room(
    room_id: int,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> None:
    """Leave a room. The room is kept even if it becomes empty."""
    await get_room_service(db).leave_room(caller_id, room_id)


@router.get(
    "/{room_id}/participants",
    response_model=List[ParticipantResponse],
    summary="List room participants with profiles",
    responses={
        200: {"description": "Participants retrieved successfully"},
        401: {"description": "Not authenticated"},
        404: {"description": "Room not found or caller is not a participant"},
    },
)
async def get_room_participants(
    room_id: int,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> List[ParticipantResponse]:
    """
    List participants of a room the caller is in.

    Participants without a saved profile are left out.
    """
    return await get_room_service(db).get_room_participants(caller_id, room_id)
