"""Tests for the room registry and room endpoints."""

import asyncio

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from opsroom.config import settings
from opsroom.models.room import Room, RoomParticipant
from opsroom.schemas.profile import ProfileData, ProfileRole
from opsroom.schemas.room import format_room_code
from opsroom.services.errors import (
    CodeSpaceExhaustedError,
    InvalidInputError,
    NotFoundError,
)
from opsroom.services.profile_service import ProfileService
from opsroom.services.room_service import RoomService, generate_room_code

from .conftest import ALICE, BOB, CAROL


async def _participant_count(db: AsyncSession, room_id: int) -> int:
    result = await db.execute(
        select(func.count()).select_from(RoomParticipant).where(RoomParticipant.room_id == room_id)
    )
    return result.scalar()


class TestRoomCodes:
    """Tests for room code generation and formatting."""

    def test_generated_codes_are_seven_digits(self):
        """Generated codes fit in seven decimal digits."""
        for _ in range(200):
            code = generate_room_code()
            assert 0 <= code <= 9_999_999

    def test_format_room_code_pads(self):
        """Short codes are zero-padded to seven digits."""
        assert format_room_code(42) == "0000042"
        assert format_room_code(1234567) == "1234567"


@pytest.mark.asyncio
class TestCreateRoom:
    """Tests for RoomService.create_room."""

    async def test_create_room_makes_creator_participant(self, db_session: AsyncSession):
        """The creator is the only participant of a new room."""
        service = RoomService(db_session)

        room_id = await service.create_room(ALICE, "Ops", "Daily sync")
        rooms = await service.get_my_rooms(ALICE)

        assert len(rooms) == 1
        assert rooms[0].id == room_id
        assert rooms[0].title == "Ops"
        assert rooms[0].description == "Daily sync"
        assert rooms[0].creator == ALICE
        assert rooms[0].participants == [ALICE]

    async def test_ids_and_codes_are_distinct(self, db_session: AsyncSession):
        """Sequential creates yield pairwise distinct ids and codes."""
        service = RoomService(db_session)

        ids = [await service.create_room(ALICE, f"Room {i}", "") for i in range(25)]
        codes = [room.code for room in await service.get_my_rooms(ALICE)]

        assert len(set(ids)) == 25
        assert len(set(codes)) == 25
        assert ids == sorted(ids)

    async def test_code_collision_resamples(self, db_session: AsyncSession, fixed_room_codes):
        """A code already in use is skipped for the next sample."""
        fixed_room_codes([1234567, 1234567, 7654321])
        service = RoomService(db_session)

        first = await service.create_room(ALICE, "First", "")
        second = await service.create_room(ALICE, "Second", "")

        codes = {room.id: room.code for room in await service.get_my_rooms(ALICE)}
        assert codes == {first: 1234567, second: 7654321}

    async def test_code_space_exhausted(
        self, db_session: AsyncSession, fixed_room_codes, monkeypatch
    ):
        """Running out of resample attempts fails without creating a room."""
        monkeypatch.setattr(settings, "room_code_max_attempts", 3)
        fixed_room_codes([5555555] * 10)
        service = RoomService(db_session)
        await service.create_room(ALICE, "Taken", "")

        with pytest.raises(CodeSpaceExhaustedError):
            await service.create_room(ALICE, "Unlucky", "")

        result = await db_session.execute(select(func.count()).select_from(Room))
        assert result.scalar() == 1

    async def test_blank_title_rejected(self, db_session: AsyncSession):
        """Whitespace-only titles are invalid input."""
        with pytest.raises(InvalidInputError):
            await RoomService(db_session).create_room(ALICE, "   ", "")

    async def test_long_description_rejected(self, db_session: AsyncSession):
        """Descriptions over 256 characters are invalid input."""
        with pytest.raises(InvalidInputError):
            await RoomService(db_session).create_room(ALICE, "Ops", "d" * 257)

    async def test_concurrent_creates_never_share_codes(self, session_maker: async_sessionmaker):
        """Concurrent creates allocate distinct ids and codes."""
        async def create(i: int) -> int:
            async with session_maker() as session:
                return await RoomService(session).create_room(ALICE, f"Room {i}", "")

        ids = await asyncio.gather(*(create(i) for i in range(20)))

        async with session_maker() as session:
            result = await session.execute(select(Room.code))
            codes = result.scalars().all()

        assert len(set(ids)) == 20
        assert len(codes) == 20
        assert len(set(codes)) == 20


@pytest.mark.asyncio
class TestJoinRoom:
    """Tests for RoomService.join_room."""

    async def test_join_then_listed(self, db_session: AsyncSession, fixed_room_codes):
        """A joined room shows up in the joiner's rooms."""
        fixed_room_codes([1234567])
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")

        joined = await service.join_room(BOB, 1234567)
        rooms = await service.get_my_rooms(BOB)

        assert joined == room_id
        assert [room.id for room in rooms] == [room_id]
        assert rooms[0].participants == [ALICE, BOB]

    async def test_join_twice_is_idempotent(self, db_session: AsyncSession, fixed_room_codes):
        """Joining again leaves the participant set unchanged."""
        fixed_room_codes([1234567])
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")

        await service.join_room(BOB, 1234567)
        await service.join_room(BOB, 1234567)
        await service.join_room(ALICE, 1234567)

        assert await _participant_count(db_session, room_id) == 2

    async def test_join_unknown_code(self, db_session: AsyncSession):
        """An unknown code fails with NotFoundError."""
        with pytest.raises(NotFoundError):
            await RoomService(db_session).join_room(BOB, 1)

    async def test_concurrent_joins(self, session_maker: async_sessionmaker, fixed_room_codes):
        """Concurrent joins, including duplicates, leave one row per caller."""
        fixed_room_codes([2222222])
        async with session_maker() as session:
            room_id = await RoomService(session).create_room(ALICE, "Ops", "")

        async def join(caller_id: str) -> None:
            async with session_maker() as session:
                await RoomService(session).join_room(caller_id, 2222222)

        callers = [BOB, CAROL, BOB, CAROL, BOB] + [f"caller-{i}" for i in range(10)]
        await asyncio.gather(*(join(caller) for caller in callers))

        async with session_maker() as session:
            rooms = await RoomService(session).get_my_rooms(ALICE)
            assert await _participant_count(session, room_id) == 13

        assert len(rooms[0].participants) == 13
        assert len(set(rooms[0].participants)) == 13


@pytest.mark.asyncio
class TestLeaveRoom:
    """Tests for RoomService.leave_room."""

    async def test_leave_removes_membership(self, db_session: AsyncSession, fixed_room_codes):
        """After leaving, the room is gone from the caller's rooms."""
        fixed_room_codes([1234567])
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")
        await service.join_room(BOB, 1234567)

        await service.leave_room(BOB, room_id)

        assert await service.get_my_rooms(BOB) == []
        assert (await service.get_my_rooms(ALICE))[0].participants == [ALICE]

    async def test_leave_never_joined_is_noop(self, db_session: AsyncSession):
        """Leaving a room one never joined succeeds and changes nothing."""
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")

        await service.leave_room(BOB, room_id)

        assert await _participant_count(db_session, room_id) == 1

    async def test_leave_unknown_room(self, db_session: AsyncSession):
        """Leaving a room that does not exist fails with NotFoundError."""
        with pytest.raises(NotFoundError):
            await RoomService(db_session).leave_room(ALICE, 999)

    async def test_empty_room_is_kept(self, db_session: AsyncSession, fixed_room_codes):
        """The last participant leaving keeps the room and its code."""
        fixed_room_codes([3141592])
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")

        await service.leave_room(ALICE, room_id)
        assert await service.room_exists(room_id) is True

        await service.join_room(BOB, 3141592)
        rooms = await service.get_my_rooms(BOB)
        assert rooms[0].id == room_id
        assert rooms[0].creator == ALICE
        assert rooms[0].participants == [BOB]


@pytest.mark.asyncio
class TestRoomParticipants:
    """Tests for RoomService.get_room_participants."""

    async def test_participants_with_profiles(self, db_session: AsyncSession, fixed_room_codes):
        """Participants come with profiles; those without one are omitted."""
        fixed_room_codes([1234567])
        profiles = ProfileService(db_session)
        await profiles.save_caller_profile(
            ALICE, ProfileData(display_name="Alice", role=ProfileRole.ENGINEER)
        )
        await profiles.save_caller_profile(
            CAROL, ProfileData(display_name="Carol", role=ProfileRole.ANALYST)
        )
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")
        await service.join_room(BOB, 1234567)
        await service.join_room(CAROL, 1234567)

        participants = await service.get_room_participants(BOB, room_id)

        assert [p.caller_id for p in participants] == [ALICE, CAROL]
        assert participants[0].profile.display_name == "Alice"
        assert participants[1].profile.role == ProfileRole.ANALYST

    async def test_non_member_gets_not_found(self, db_session: AsyncSession):
        """Non-participants cannot list participants."""
        service = RoomService(db_session)
        room_id = await service.create_room(ALICE, "Ops", "")

        with pytest.raises(NotFoundError):
            await service.get_room_participants(BOB, room_id)

    async def test_unknown_room(self, db_session: AsyncSession):
        """Unknown rooms fail with NotFoundError."""
        with pytest.raises(NotFoundError):
            await RoomService(db_session).get_room_participants(ALICE, 404)


@pytest.mark.asyncio
class TestRoomEndpoints:
    """Tests for the room endpoints."""

    async def test_create_and_list(self, client: AsyncClient, alice_headers: dict):
        """POST /api/rooms returns the id; GET lists the room view."""
        response = await client.post(
            "/api/rooms",
            json={"title": "Ops", "description": "Daily sync"},
            headers=alice_headers,
        )
        assert response.status_code == 201
        room_id = response.json()["id"]

        response = await client.get("/api/rooms", headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["id"] == room_id
        assert data[0]["title"] == "Ops"
        assert data[0]["creator"] == ALICE
        assert data[0]["participants"] == [ALICE]
        assert data[0]["formatted_code"] == format_room_code(data[0]["code"])
        assert len(data[0]["formatted_code"]) == 7

    async def test_create_validation(self, client: AsyncClient, alice_headers: dict):
        """Empty and oversized titles are rejected."""
        response = await client.post("/api/rooms", json={"title": ""}, headers=alice_headers)
        assert response.status_code == 422

        response = await client.post("/api/rooms", json={"title": "t" * 65}, headers=alice_headers)
        assert response.status_code == 422

    async def test_blank_title_is_invalid_input(self, client: AsyncClient, alice_headers: dict):
        """A whitespace title reaches the service and is reported as invalid input."""
        response = await client.post("/api/rooms", json={"title": "   "}, headers=alice_headers)

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_input"

    async def test_join_and_leave(
        self, client: AsyncClient, alice_headers: dict, bob_headers: dict, fixed_room_codes
    ):
        """Join by code, then leave by id."""
        fixed_room_codes([1234567])
        response = await client.post("/api/rooms", json={"title": "Ops"}, headers=alice_headers)
        room_id = response.json()["id"]

        response = await client.post("/api/rooms/join", json={"code": 1234567}, headers=bob_headers)
        assert response.status_code == 204

        response = await client.get("/api/rooms", headers=bob_headers)
        assert [room["id"] for room in response.json()] == [room_id]

        response = await client.post(f"/api/rooms/{room_id}/leave", headers=bob_headers)
        assert response.status_code == 204

        response = await client.get("/api/rooms", headers=bob_headers)
        assert response.json() == []

    async def test_join_unknown_code(self, client: AsyncClient, bob_headers: dict):
        """Unknown codes return 404."""
        response = await client.post("/api/rooms/join", json={"code": 7777777}, headers=bob_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    async def test_join_code_out_of_range(self, client: AsyncClient, bob_headers: dict):
        """Codes with more than seven digits fail validation."""
        response = await client.post("/api/rooms/join", json={"code": 10_000_000}, headers=bob_headers)

        assert response.status_code == 422

    async def test_leave_unknown_room(self, client: AsyncClient, bob_headers: dict):
        """Leaving an unknown room returns 404."""
        response = await client.post("/api/rooms/12345/leave", headers=bob_headers)

        assert response.status_code == 404

    async def test_participants_endpoint(
        self, client: AsyncClient, alice_headers: dict, bob_headers: dict
    ):
        """Members see participants with profiles; non-members get 404."""
        await client.put(
            "/api/profiles/me",
            json={"display_name": "Alice", "role": "engineer"},
            headers=alice_headers,
        )
        response = await client.post("/api/rooms", json={"title": "Ops"}, headers=alice_headers)
        room_id = response.json()["id"]

        response = await client.get(f"/api/rooms/{room_id}/participants", headers=alice_headers)
        assert response.status_code == 200
        assert response.json() == [
            {"caller_id": ALICE, "profile": {"display_name": "Alice", "role": "engineer"}}
        ]

        response = await client.get(f"/api/rooms/{room_id}/participants", headers=bob_headers)
        assert response.status_code == 404
