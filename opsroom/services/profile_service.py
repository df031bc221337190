"""Profile store: one display profile per caller."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.profile import Profile
from ..schemas.profile import ProfileData
from .auth_service import CallerId
from .room_lock_service import room_locks

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads and writes caller profiles."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, caller_id: CallerId) -> Optional[Profile]:
        result = await self.db.execute(
            select(Profile).where(Profile.caller_id == caller_id)
        )
        return result.scalar_one_or_none()

    async def get_caller_profile(self, caller_id: CallerId) -> Optional[ProfileData]:
        """Return the caller's own profile, or None if never saved."""
        return await self.get_user_profile(caller_id)

    async def get_user_profile(self, target: CallerId) -> Optional[ProfileData]:
        """Return any caller's profile, or None if never saved."""
        profile = await self._get(target)
        if profile is None:
            return None
        return ProfileData.model_validate(profile)

    async def has_profile(self, caller_id: CallerId) -> bool:
        """Whether the caller has saved a profile."""
        return await self._get(caller_id) is not None

    async def save_caller_profile(self, caller_id: CallerId, data: ProfileData) -> None:
        """
        Create or fully replace the caller's profile.

        Repeated saves overwrite; there is no way to edit another caller's
        profile.
        """
        async with room_locks.hold("profile", caller_id):
            profile = await self._get(caller_id)
            if profile is None:
                profile = Profile(caller_id=caller_id)
                self.db.add(profile)
                logger.info(f"Profile created for caller {caller_id}")

            profile.display_name = data.display_name
            profile.role = data.role.value
            await self.db.commit()


def get_profile_service(db: AsyncSession) -> ProfileService:
    """
    Factory function to create a ProfileService instance.

    Args:
        db: SQLAlchemy async database session

    Returns:
        ProfileService instance
    """
    return ProfileService(db)
