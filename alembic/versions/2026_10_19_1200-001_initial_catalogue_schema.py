"""initial catalogue schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _link_table(name: str, target_table: str, target_column: str) -> None:
    op.create_table(
        name,
        sa.Column('film_id', sa.String(length=36), nullable=False),
        sa.Column(target_column, sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['film_id'], ['films.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint([target_column], [f'{target_table}.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('film_id', target_column)
    )
    op.create_index(op.f(f'ix_{name}_{target_column}'), name, [target_column], unique=False)


def upgrade() -> None:
    # Create films table
    op.create_table(
        'films',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('release_date', sa.String(length=50), nullable=True),
        sa.Column('language', sa.String(length=100), nullable=True),
        sa.Column('runtime', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(length=1000), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=True),
        sa.Column('boost', sa.Boolean(), nullable=False, server_default='false'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_films_title'), 'films', ['title'], unique=False)
    op.create_index(op.f('ix_films_type'), 'films', ['type'], unique=False)
    op.create_index(op.f('ix_films_created_at'), 'films', ['created_at'], unique=False)

    # Create reference tables
    op.create_table(
        'directors',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'countries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('code', sa.String(length=3), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'genres',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'keywords',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_keywords_name'), 'keywords', ['name'], unique=True)
    for table in ('directors', 'countries', 'genres', 'keywords'):
        op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'], unique=False)

    # Create link tables
    _link_table('film_directors', 'directors', 'director_id')
    _link_table('film_countries', 'countries', 'country_id')
    _link_table('film_genres', 'genres', 'genre_id')
    _link_table('film_keywords', 'keywords', 'keyword_id')


def downgrade() -> None:
    op.drop_table('film_keywords')
    op.drop_table('film_genres')
    op.drop_table('film_countries')
    op.drop_table('film_directors')
    op.drop_table('keywords')
    op.drop_table('genres')
    op.drop_table('countries')
    op.drop_table('directors')
    op.drop_table('films')
