"""create users, rooms and room likes

Revision ID: 4b1d2c7e9a10
Revises:
Create Date: 2026-10-18 12:10:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b1d2c7e9a10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_email'), ['email'], unique=True)

    op.create_table(
        'rooms',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('room_type', sa.String(length=50), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=True),
        sa.Column('owner_identity', sa.String(length=255), nullable=True),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('owner_id', sa.String(length=255), nullable=True),
        sa.Column('creator_id', sa.String(length=255), nullable=True),
        sa.Column('owner', sa.JSON(), nullable=True),
        sa.Column('owner_email', sa.String(length=255), nullable=True),
        sa.Column('like_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('rooms', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_rooms_location'), ['location'], unique=False)
        batch_op.create_index(batch_op.f('ix_rooms_owner_identity'), ['owner_identity'], unique=False)
        batch_op.create_index(batch_op.f('ix_rooms_owner_email'), ['owner_email'], unique=False)

    op.create_table(
        'room_likes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.String(length=64), nullable=False),
        sa.Column('user_identity', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'user_identity', name='uq_room_user_like')
    )
    with op.batch_alter_table('room_likes', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_room_likes_room_id'), ['room_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_room_likes_user_identity'), ['user_identity'], unique=False)


def downgrade():
    with op.batch_alter_table('room_likes', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_room_likes_user_identity'))
        batch_op.drop_index(batch_op.f('ix_room_likes_room_id'))
    op.drop_table('room_likes')

    with op.batch_alter_table('rooms', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_rooms_owner_email'))
        batch_op.drop_index(batch_op.f('ix_rooms_owner_identity'))
        batch_op.drop_index(batch_op.f('ix_rooms_location'))
    op.drop_table('rooms')

    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_users_email'))
    op.drop_table('users')
