"""
Create two demo callers with profiles, an "Ops" room they both belong to and
a first message, then print their tokens and the room code.
"""

import asyncio
import sys

sys.path.insert(0, ".")

from opsroom.database import async_session_maker, create_all_tables
from opsroom.schemas.profile import ProfileData, ProfileRole
from opsroom.schemas.room import format_room_code
from opsroom.services.auth_service import create_access_token
from opsroom.services.message_service import MessageService
from opsroom.services.profile_service import ProfileService
from opsroom.services.room_service import RoomService

ALICE = "demo-alice"
BOB = "demo-bob"


async def seed_demo_room():
    await create_all_tables()

    async with async_session_maker() as db:
        profiles = ProfileService(db)
        await profiles.save_caller_profile(
            ALICE, ProfileData(display_name="Alice", role=ProfileRole.ENGINEER)
        )
        await profiles.save_caller_profile(
            BOB, ProfileData(display_name="Bob", role=ProfileRole.CLIENT)
        )

        rooms = RoomService(db)
        room_id = await rooms.create_room(ALICE, "Ops", "Daily operations sync")
        view = next(v for v in await rooms.get_my_rooms(ALICE) if v.id == room_id)
        await rooms.join_room(BOB, view.code)

        await MessageService(db).send_message(ALICE, room_id, "status green")

    print(f'Created room {room_id} "Ops" with code {format_room_code(view.code)}')
    print()
    print('Tokens:')
    print(f'  {ALICE}: {create_access_token(ALICE)}')
    print(f'  {BOB}: {create_access_token(BOB)}')


if __name__ == "__main__":
    asyncio.run(seed_demo_room())
