"""create profile, operator role, room, message and note tables

Revision ID: 3b8f2c1d9a04
Revises:
Create Date: 2026-10-18 09:12:40.118202

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b8f2c1d9a04'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLite only autoincrements INTEGER PRIMARY KEY columns
ID_TYPE = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def upgrade() -> None:
    """Create Profiles, OperatorRoles, Rooms, RoomParticipants, Messages and RoomNotes."""
    op.create_table('Profiles',
    sa.Column('caller_id', sa.String(length=128), nullable=False),
    sa.Column('display_name', sa.String(length=32), nullable=False),
    sa.Column('role', sa.String(length=20), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('caller_id')
    )

    op.create_table('OperatorRoles',
    sa.Column('caller_id', sa.String(length=128), nullable=False),
    sa.Column('role', sa.String(length=20), nullable=False),
    sa.Column('assigned_by', sa.String(length=128), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('caller_id')
    )
    op.create_index(op.f('ix_OperatorRoles_role'), 'OperatorRoles', ['role'], unique=False)

    op.create_table('Rooms',
    sa.Column('id', ID_TYPE, autoincrement=True, nullable=False),
    sa.Column('title', sa.String(length=64), nullable=False),
    sa.Column('description', sa.String(length=256), nullable=False),
    sa.Column('creator_id', sa.String(length=128), nullable=False),
    sa.Column('code', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_Rooms_code'), 'Rooms', ['code'], unique=True)
    op.create_index(op.f('ix_Rooms_creator_id'), 'Rooms', ['creator_id'], unique=False)

    op.create_table('RoomParticipants',
    sa.Column('id', ID_TYPE, autoincrement=True, nullable=False),
    sa.Column('room_id', ID_TYPE, nullable=False),
    sa.Column('caller_id', sa.String(length=128), nullable=False),
    sa.Column('joined_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['room_id'], ['Rooms.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('room_id', 'caller_id', name='uq_room_participant')
    )
    op.create_index(op.f('ix_RoomParticipants_room_id'), 'RoomParticipants', ['room_id'], unique=False)
    op.create_index(op.f('ix_RoomParticipants_caller_id'), 'RoomParticipants', ['caller_id'], unique=False)

    op.create_table('Messages',
    sa.Column('id', ID_TYPE, autoincrement=True, nullable=False),
    sa.Column('room_id', ID_TYPE, nullable=False),
    sa.Column('sender_id', sa.String(length=128), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('timestamp', sa.BigInteger(), nullable=False),
    sa.ForeignKeyConstraint(['room_id'], ['Rooms.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_messages_room_id_id', 'Messages', ['room_id', 'id'], unique=False)

    op.create_table('RoomNotes',
    sa.Column('room_id', sa.BigInteger(), autoincrement=False, nullable=False),
    sa.Column('caller_id', sa.String(length=128), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('room_id', 'caller_id')
    )


def downgrade() -> None:
    """Drop all room tables."""
    op.drop_table('RoomNotes')
    op.drop_index('ix_messages_room_id_id', table_name='Messages')
    op.drop_table('Messages')
    op.drop_index(op.f('ix_RoomParticipants_caller_id'), table_name='RoomParticipants')
    op.drop_index(op.f('ix_RoomParticipants_room_id'), table_name='RoomParticipants')
    op.drop_table('RoomParticipants')
    op.drop_index(op.f('ix_Rooms_creator_id'), table_name='Rooms')
    op.drop_index(op.f('ix_Rooms_code'), table_name='Rooms')
    op.drop_table('Rooms')
    op.drop_index(op.f('ix_OperatorRoles_role'), table_name='OperatorRoles')
    op.drop_table('OperatorRoles')
    op.drop_table('Profiles')
