"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=True),
        sa.Column('avatar_url', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('username'),
    )
    op.create_index(op.f('ix_users_external_id'), 'users', ['external_id'], unique=True)

    # Create movies table
    op.create_table(
        'movies',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('overview', sa.Text(), nullable=False),
        sa.Column('poster_path', sa.String(length=200), nullable=True),
        sa.Column('backdrop_path', sa.String(length=200), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('vote_average', sa.Float(), nullable=False),
        sa.Column('popularity', sa.Float(), nullable=False),
        sa.Column('genres', ARRAY(sa.String()), nullable=False),
        sa.Column('synced_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies_title'), 'movies', ['title'], unique=False)

    # Create movie_reviews table (movie_id intentionally has no foreign key)
    op.create_table(
        'movie_reviews',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('user_id', sa.String(length=32), nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('rating BETWEEN 1 AND 10', name='ck_review_rating_range'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'movie_id', name='uq_review_user_movie')
    )
    op.create_index(op.f('ix_movie_reviews_user_id'), 'movie_reviews', ['user_id'], unique=False)
    op.create_index(op.f('ix_movie_reviews_movie_id'), 'movie_reviews', ['movie_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_movie_reviews_movie_id'), table_name='movie_reviews')
    op.drop_index(op.f('ix_movie_reviews_user_id'), table_name='movie_reviews')
    op.drop_table('movie_reviews')
    op.drop_index(op.f('ix_movies_title'), table_name='movies')
    op.drop_table('movies')
    op.drop_index(op.f('ix_users_external_id'), table_name='users')
    op.drop_table('users')
