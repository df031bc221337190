"""Private note API endpoints.

Each caller keeps one note per room, visible only to them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.note import NoteResponse, NoteSave
from ..services.auth_service import CallerId, get_current_caller
from ..services.note_service import get_note_service

router = APIRouter(prefix="/api/rooms/{room_id}/note", tags=["Notes"])


@router.get(
    "",
    response_model=NoteResponse,
    summary="Get the caller's note for a room",
)
async def get_note(
    room_id: int,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """Get the caller's note; empty if none was saved."""
    note = await get_note_service(db).get_note(caller_id, room_id)
    return NoteResponse(note=note)


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Save the caller's note for a room",
    responses={
        204: {"description": "Note saved"},
        401: {"description": "Not authenticated"},
        422: {"description": "Validation error"},
    },
)
async def save_note(
    room_id: int,
    body: NoteSave,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> None:
    """Replace the caller's note for the room."""
    await get_note_service(db).save_note(caller_id, room_id, body.note)
