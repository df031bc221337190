"""Message API endpoints.

Clients poll the message list every few seconds; there is no push channel.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.message import MessageCreate, MessageResponse
from ..services.auth_service import CallerId, get_current_caller
from ..services.message_service import get_message_service

router = APIRouter(prefix="/api/rooms/{room_id}/messages", tags=["Messages"])


@router.get(
    "",
    response_model=List[MessageResponse],
    summary="Get a room's messages",
    description="Get the full message log of a room, oldest first.",
    responses={
        200: {"description": "Messages retrieved successfully"},
        401: {"description": "Not authenticated"},
        403: {"description": "Caller is not a participant"},
        404: {"description": "Room not found"},
    },
)
async def get_messages(
    room_id: int,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> List[MessageResponse]:
    """Get every message in the room in the order it was sent."""
    return await get_message_service(db).get_messages(caller_id, room_id)


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Send a message",
    responses={
        204: {"description": "Message appended"},
        401: {"description": "Not authenticated"},
        403: {"description": "Caller is not a participant"},
        404: {"description": "Room not found"},
        422: {"description": "Validation error"},
    },
)
async def send_message(
    room_id: int,
    body: MessageCreate,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Append a message to the room's log.

    - **content**: Message text (required, not blank)
    """
    await get_message_service(db).send_message(caller_id, room_id, body.content)
