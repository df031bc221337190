"""Access control service for platform operator roles.

Operator roles are independent of the display role on a profile:

- An explicit assignment (made by an admin) always wins.
- Callers listed in ``settings.bootstrap_admin_ids`` are admin until
  assigned something else, which is how the first admin comes to exist.
- Everyone else is ``user`` once they have saved a profile and ``guest``
  before that.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..models.operator_role import OperatorRoleAssignment
from ..schemas.access import OperatorRole
from .auth_service import CallerId
from .errors import UnauthorizedError
from .profile_service import ProfileService
from .room_lock_service import room_locks

logger = logging.getLogger(__name__)


class AccessService:
    """
    Service class for operator role lookups and assignment.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the AccessService.

        Args:
            db: SQLAlchemy async database session
        """
        self.db = db

    async def _get_assignment(self, caller_id: CallerId) -> Optional[OperatorRoleAssignment]:
        result = await self.db.execute(
            select(OperatorRoleAssignment).where(
                OperatorRoleAssignment.caller_id == caller_id
            )
        )
        return result.scalar_one_or_none()

    async def get_caller_role(self, caller_id: CallerId) -> OperatorRole:
        """
        Get the caller's operator role.

        Args:
            caller_id: The caller's id

        Returns:
            The assigned role, or the derived default for unassigned callers.
        """
        assignment = await self._get_assignment(caller_id)
        if assignment is not None:
            return OperatorRole(assignment.role)

        if caller_id in settings.bootstrap_admins:
            return OperatorRole.ADMIN

        if await ProfileService(self.db).has_profile(caller_id):
            return OperatorRole.USER
        return OperatorRole.GUEST

    async def is_admin(self, caller_id: CallerId) -> bool:
        """Check whether the caller's operator role is admin."""
        return await self.get_caller_role(caller_id) == OperatorRole.ADMIN

    async def assign_role(
        self,
        caller_id: CallerId,
        target: CallerId,
        role: OperatorRole,
    ) -> None:
        """
        Assign an operator role to ``target``.

        Admins may change any caller's role, their own included.

        Args:
            caller_id: The caller making the assignment
            target: The caller whose role changes
            role: The new operator role

        Raises:
            UnauthorizedError: If the caller is not currently an admin
        """
        # All assignments share one key; the admin check and the write run under it
        async with room_locks.hold("operator-roles"):
            if not await self.is_admin(caller_id):
                logger.warning(
                    f"Caller {caller_id} denied assigning role {role.value} to {target}"
                )
                raise UnauthorizedError("Only admins can assign operator roles")

            assignment = await self._get_assignment(target)
            if assignment is None:
                assignment = OperatorRoleAssignment(caller_id=target)
                self.db.add(assignment)

            assignment.role = role.value
            assignment.assigned_by = caller_id
            await self.db.commit()

        logger.info(f"Caller {caller_id} assigned operator role {role.value} to {target}")


def get_access_service(db: AsyncSession) -> AccessService:
    """
    Factory function to create an AccessService instance.

    Args:
        db: SQLAlchemy async database session

    Returns:
        AccessService instance
    """
    return AccessService(db)
