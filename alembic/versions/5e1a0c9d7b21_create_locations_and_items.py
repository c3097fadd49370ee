"""create_locations_and_items

Revision ID: 5e1a0c9d7b21
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from stowtrack.config import settings


revision: str = '5e1a0c9d7b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _search_document(config: str, with_properties: bool = False) -> str:
    # Same expression as stowtrack.search.query.document_vector
    document = (
        f"setweight(to_tsvector('{config}'::regconfig, coalesce(name, '')), 'A') || "
        f"setweight(to_tsvector('{config}'::regconfig, coalesce(description, '')), 'B')"
    )
    if with_properties:
        document += (
            f" || setweight(jsonb_to_tsvector('{config}'::regconfig, "
            f"coalesce(properties, '{{}}'::jsonb), '[\"string\"]'::jsonb), 'C')"
        )
    return document


def upgrade() -> None:
    conn = op.get_bind()
    if not conn.dialect.has_table(conn, 'locations'):
        op.create_table(
            'locations',
            sa.Column('id', sa.String(length=255), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('description', sa.String(length=1000), nullable=True),
            sa.Column('parent_location_id', sa.String(length=255), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(
                ['parent_location_id'], ['locations.id'],
                name='fk_locations_parent_location', ondelete='RESTRICT',
            ),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(
            op.f('ix_locations_parent_location_id'), 'locations', ['parent_location_id'], unique=False,
        )

    if not conn.dialect.has_table(conn, 'items'):
        op.create_table(
            'items',
            sa.Column('id', sa.Uuid(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('description', sa.String(length=1000), nullable=True),
            sa.Column('location_id', sa.String(length=255), nullable=False),
            sa.Column(
                'properties',
                sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'),
                nullable=False,
            ),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(
                ['location_id'], ['locations.id'],
                name='fk_items_location', ondelete='RESTRICT',
            ),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_items_location_id'), 'items', ['location_id'], unique=False)

    if conn.dialect.name == 'postgresql':
        config = settings.SEARCH_TEXT_CONFIG
        locations_document = _search_document(config)
        items_document = _search_document(config, with_properties=True)
        op.execute(f"CREATE INDEX IF NOT EXISTS ix_locations_search ON locations USING gin (({locations_document}))")
        op.execute(f"CREATE INDEX IF NOT EXISTS ix_items_search ON items USING gin (({items_document}))")


def downgrade() -> None:
    conn = op.get_bind()
    if conn.dialect.name == 'postgresql':
        op.execute("DROP INDEX IF EXISTS ix_items_search")
        op.execute("DROP INDEX IF EXISTS ix_locations_search")
    op.drop_index(op.f('ix_items_location_id'), table_name='items')
    op.drop_table('items')
    op.drop_index(op.f('ix_locations_parent_location_id'), table_name='locations')
    op.drop_table('locations')
