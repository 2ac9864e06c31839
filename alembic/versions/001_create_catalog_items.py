"""Create catalog_items table

Revision ID: 001_create_catalog_items
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_catalog_items'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'catalog_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('remote_id', sa.Integer(), nullable=False),
        sa.Column('parent_remote_id', sa.Integer(), nullable=True),
        sa.Column('kind', sa.String(32), nullable=False, server_default='simple'),
        sa.Column('name', sa.String(), nullable=False, server_default=''),
        sa.Column('slug', sa.String(), nullable=True),
        sa.Column('sku', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('short_description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(32), nullable=True),
        sa.Column('stock_status', sa.String(32), nullable=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('price', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('regular_price', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('sale_price', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('weight', sa.Numeric(10, 3), nullable=False, server_default='0'),
        sa.Column('barcode', sa.String(), nullable=True),
        sa.Column('images', sa.Text(), nullable=True),
        sa.Column('categories', sa.Text(), nullable=True),
        sa.Column('attributes', sa.Text(), nullable=True),
        sa.Column('purchased', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('purchased_at', sa.DateTime(), nullable=True),
        sa.Column('purchase_package', sa.Integer(), nullable=True),
        sa.Column('purchase_qty', sa.Integer(), nullable=True),
        sa.Column('purchase_price', sa.Numeric(14, 2), nullable=True),
        sa.Column('purchase_currency', sa.String(8), nullable=True),
        sa.Column('is_missing_from_woo', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('store_name', sa.String(), nullable=True),
        sa.Column('keterangan', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_catalog_items_id'), 'catalog_items', ['id'], unique=False)
    op.create_index(op.f('ix_catalog_items_remote_id'), 'catalog_items', ['remote_id'], unique=True)
    op.create_index(op.f('ix_catalog_items_parent_remote_id'), 'catalog_items', ['parent_remote_id'], unique=False)
    op.create_index(op.f('ix_catalog_items_sku'), 'catalog_items', ['sku'], unique=False)
    op.create_index(op.f('ix_catalog_items_is_missing_from_woo'), 'catalog_items', ['is_missing_from_woo'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_catalog_items_is_missing_from_woo'), table_name='catalog_items')
    op.drop_index(op.f('ix_catalog_items_sku'), table_name='catalog_items')
    op.drop_index(op.f('ix_catalog_items_parent_remote_id'), table_name='catalog_items')
    op.drop_index(op.f('ix_catalog_items_remote_id'), table_name='catalog_items')
    op.drop_index(op.f('ix_catalog_items_id'), table_name='catalog_items')
    op.drop_table('catalog_items')
