"""Initial catalog schema

Revision ID: 4c1d9e2a7b10
Revises:
Create Date: 2026-10-19 10:12:41.215832

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d9e2a7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1. Accounts
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_sessions_user_id'), 'user_sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_sessions_expires_at'), 'user_sessions', ['expires_at'], unique=False)

    # 2. Catalog
    op.create_table(
        'anime_series',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('cover_image', sa.String(), nullable=True),
        sa.Column('banner_image', sa.String(), nullable=True),
        sa.Column('genres', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('rating', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_anime_series_id'), 'anime_series', ['id'], unique=False)
    op.create_index(op.f('ix_anime_series_title'), 'anime_series', ['title'], unique=False)
    op.create_index(op.f('ix_anime_series_status'), 'anime_series', ['status'], unique=False)
    op.create_index(op.f('ix_anime_series_created_at'), 'anime_series', ['created_at'], unique=False)

    op.create_table(
        'movies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('cover_image', sa.String(), nullable=True),
        sa.Column('banner_image', sa.String(), nullable=True),
        sa.Column('genres', sa.JSON(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('rating', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies_id'), 'movies', ['id'], unique=False)
    op.create_index(op.f('ix_movies_title'), 'movies', ['title'], unique=False)
    op.create_index(op.f('ix_movies_created_at'), 'movies', ['created_at'], unique=False)

    op.create_table(
        'episodes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('anime_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('episode_number', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['anime_id'], ['anime_series.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_episodes_id'), 'episodes', ['id'], unique=False)
    op.create_index(op.f('ix_episodes_anime_id'), 'episodes', ['anime_id'], unique=False)
    op.create_index(op.f('ix_episodes_created_at'), 'episodes', ['created_at'], unique=False)

    # 3. Streaming
    op.create_table(
        'video_sources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('episode_id', sa.Integer(), nullable=True),
        sa.Column('movie_id', sa.Integer(), nullable=True),
        sa.Column('server_name', sa.String(), nullable=False),
        sa.Column('server_number', sa.Integer(), nullable=False),
        sa.Column('video_url', sa.String(), nullable=False),
        sa.Column('quality', sa.String(), nullable=True),
        sa.CheckConstraint('(episode_id IS NULL) <> (movie_id IS NULL)', name='ck_video_sources_single_parent'),
        sa.ForeignKeyConstraint(['episode_id'], ['episodes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_video_sources_id'), 'video_sources', ['id'], unique=False)
    op.create_index(op.f('ix_video_sources_episode_id'), 'video_sources', ['episode_id'], unique=False)
    op.create_index(op.f('ix_video_sources_movie_id'), 'video_sources', ['movie_id'], unique=False)

    op.create_table(
        'servers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('region', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('storage_used', sa.Integer(), nullable=True),
        sa.Column('total_storage', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_servers_id'), 'servers', ['id'], unique=False)
    op.create_index(op.f('ix_servers_number'), 'servers', ['number'], unique=False)


def downgrade() -> None:
    op.drop_table('servers')
    op.drop_table('video_sources')
    op.drop_table('episodes')
    op.drop_table('movies')
    op.drop_table('anime_series')
    op.drop_table('user_sessions')
    op.drop_table('users')
