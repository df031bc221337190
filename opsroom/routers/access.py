"""Access control API endpoints for platform operator roles."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.access import AdminStatusResponse, OperatorRoleAssign, OperatorRoleResponse
from ..services.access_service import get_access_service
from ..services.auth_service import CALLER_ID_MAX_LENGTH, CallerId, get_current_caller

router = APIRouter(prefix="/api/access", tags=["Access Control"])


@router.get(
    "/role",
    response_model=OperatorRoleResponse,
    summary="Get the caller's operator role",
)
async def get_caller_user_role(
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> OperatorRoleResponse:
    """Get the caller's platform operator role (admin, user or guest)."""
    role = await get_access_service(db).get_caller_role(caller_id)
    return OperatorRoleResponse(role=role)


@router.get(
    "/is-admin",
    response_model=AdminStatusResponse,
    summary="Check whether the caller is an admin",
)
async def is_caller_admin(
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    db: AsyncSession = Depends(get_db),
) -> AdminStatusResponse:
    """Return whether the caller's operator role is admin."""
    is_admin = await get_access_service(db).is_admin(caller_id)
    return AdminStatusResponse(is_admin=is_admin)


@router.put(
    "/roles/{target}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Assign an operator role",
    description="Assign an operator role to any caller. Admin only.",
    responses={
        204: {"description": "Role assigned"},
        401: {"description": "Not authenticated"},
        403: {"description": "Caller is not an admin"},
        422: {"description": "Validation error"},
    },
)
async def assign_caller_user_role(
    body: OperatorRoleAssign,
    caller_id: Annotated[CallerId, Depends(get_current_caller)],
    target: str = Path(..., min_length=1, max_length=CALLER_ID_MAX_LENGTH),
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Assign an operator role to a caller.

    - **target**: caller id receiving the role
    - **role**: admin, user or guest
    """
    await get_access_service(db).assign_role(caller_id, target, body.role)
