"""create_store_tables

Revision ID: 3f9c1e7a2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f9c1e7a2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')

product_category = sa.Enum(
    'ELECTRIC', 'WATER', 'GAS', 'THERMAL', name='store_product_category_enum'
)
stock_status = sa.Enum(
    'in_stock', 'on_request', 'out_of_stock', name='store_stock_status_enum'
)
discount_type = sa.Enum('percent', 'fixed', name='store_discount_type_enum')
order_status = sa.Enum(
    'new', 'processing', 'in_delivery', 'complete', 'cancelled',
    name='store_order_status_enum',
)


def upgrade() -> None:
    """Upgrade schema - Create catalog, discount and order tables."""

    op.create_table(
        'store_products',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', product_category, nullable=False),
        sa.Column('manufacturer', sa.String(length=100), nullable=False),
        sa.Column('series', sa.String(length=100), nullable=True),
        sa.Column('mounting', sa.String(length=100), nullable=True),
        sa.Column('protocol', sa.String(length=255), nullable=True),
        sa.Column('max_capacity', sa.Numeric(12, 2), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), server_default='RON', nullable=False),
        sa.Column('stock_status', stock_status, server_default='in_stock', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('image_url', sa.String(length=512), nullable=True),
        sa.Column('datasheet_url', sa.String(length=512), nullable=True),
        sa.Column('specs', JSONType, nullable=False),
        sa.Column('short_description', JSONType, nullable=False),
        sa.Column('full_description', JSONType, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('price >= 0', name='ck_store_products_price_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sku'),
    )
    op.create_index('ix_store_products_category', 'store_products', ['category'])
    op.create_index('ix_store_products_manufacturer', 'store_products', ['manufacturer'])

    op.create_table(
        'store_discounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', discount_type, nullable=False),
        sa.Column('value', sa.Numeric(12, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('value >= 0', name='ck_store_discounts_value_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )

    op.create_table(
        'store_orders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_number', sa.String(length=50), nullable=False),
        sa.Column('client_token', sa.String(length=100), nullable=True),
        sa.Column('client_ip', sa.String(length=64), nullable=True),
        sa.Column('customer_email', sa.String(length=255), nullable=False),
        sa.Column('order_notes', sa.Text(), nullable=True),
        sa.Column('billing_details', JSONType, nullable=False),
        sa.Column('shipping_details', JSONType, nullable=False),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('discount_code', sa.String(length=50), nullable=True),
        sa.Column('discount_amount', sa.Numeric(12, 2), server_default='0', nullable=False),
        sa.Column('final_total', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), server_default='RON', nullable=False),
        sa.Column('status', order_status, server_default='new', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_store_orders_order_number', 'store_orders', ['order_number'], unique=True)
    op.create_index('ix_store_orders_client_token', 'store_orders', ['client_token'])
    op.create_index('ix_store_orders_client_ip', 'store_orders', ['client_ip'])

    op.create_table(
        'store_order_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=True),
        sa.Column('product_name', sa.String(length=255), nullable=False),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('line_total', sa.Numeric(12, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['store_orders.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_store_order_items_order_id', 'store_order_items', ['order_id'])


def downgrade() -> None:
    """Downgrade schema - Drop store tables and enum types."""
    op.drop_index('ix_store_order_items_order_id', table_name='store_order_items')
    op.drop_table('store_order_items')
    op.drop_index('ix_store_orders_client_ip', table_name='store_orders')
    op.drop_index('ix_store_orders_client_token', table_name='store_orders')
    op.drop_index('ix_store_orders_order_number', table_name='store_orders')
    op.drop_table('store_orders')
    op.drop_table('store_discounts')
    op.drop_index('ix_store_products_manufacturer', table_name='store_products')
    op.drop_index('ix_store_products_category', table_name='store_products')
    op.drop_table('store_products')

    bind = op.get_bind()
    for enum_type in (order_status, discount_type, stock_status, product_category):
        enum_type.drop(bind, checkfirst=True)
