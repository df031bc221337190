"""Profile API endpoints.

A profile is a caller's display name and display role. Callers may read
any profile but only write their own. Other callers' profiles live under
`/by-id/`, so no caller id can collide with `/me`.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.profile import ProfileData
from ..services.auth_service import CALLER_ID_MAX_LENGTH, CallerId, get_current_caller
from ..services.profile_service import get_profile_service

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])


@router.get(
    "/me",
    response_model=Optional[ProfileData],
    summary="Get the caller's profile",
    description="Returns the caller's own profile, or null if none has been saved yet.",
    responses={
        200: {"description": "Profile or null"},
        401: {"description": "Not authenticated"},
    },
)
async def get_caller_user_profile(
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> Optional[ProfileData]:
    """Get the caller's own profile."""
    return await get_profile_service(db).get_caller_profile(caller_id)


@router.put(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Save the caller's profile",
    description="Creates the caller's profile or replaces it entirely.",
    responses={
        204: {"description": "Profile saved"},
        401: {"description": "Not authenticated"},
        422: {"description": "Validation error"},
    },
)
async def save_caller_user_profile(
    profile: ProfileData,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Save the caller's profile.

    - **display_name**: 1-32 characters
    - **role**: client, admin, consultant, engineer or analyst
    """
    await get_profile_service(db).save_caller_profile(caller_id, profile)


@router.get(
    "/by-id/{target}",
    response_model=Optional[ProfileData],
    summary="Get a user's profile",
    description="Returns any caller's public profile, or null if they have none.",
    responses={
        200: {"description": "Profile or null"},
        401: {"description": "Not authenticated"},
    },
)
async def get_user_profile(
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    target: str = Path(..., min_length=1, max_length=CALLER_ID_MAX_LENGTH),
    db: AsyncSession = Depends(get_db),
) -> Optional[ProfileData]:
    """Get another caller's profile by their caller id."""
    return await get_profile_service(db).get_user_profile(target)
