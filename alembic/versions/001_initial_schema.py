"""Initial schema with all tables

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(*values: str) -> sa.Enum:
    # Stored as plain strings holding the enum value
    return sa.Enum(*values, native_enum=False, length=32)


BARCODE_TYPES = _enum('qr', 'ean13', 'ean8', 'code128', 'code39', 'upc', 'other')
ORDER_STATUSES = _enum(
    'pending', 'received', 'bag_scanned', 'picking', 'completed',
    'photo_verified', 'rack_assigned', 'handed_off',
)
ZONES = _enum('Zone A', 'Zone B', 'Zone C', 'Zone D')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _order_columns(user_ondelete: str):
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(100), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete=user_ondelete), nullable=False),
        sa.Column('zone', ZONES, nullable=False),
        sa.Column('item_count', sa.Integer(), nullable=False),
        sa.Column('target_time', sa.Integer(), nullable=True),
        sa.Column('pick_time', sa.Integer(), nullable=True),
        sa.Column('bag_id', sa.String(100), nullable=True),
        sa.Column('rack_location', sa.String(100), nullable=True),
        sa.Column('rider_name', sa.String(255), nullable=True),
        sa.Column('rider_id', sa.String(100), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _order_checks(table: str):
    return [
        sa.CheckConstraint('item_count >= 1', name=f'ck_{table}_item_count_positive'),
        sa.CheckConstraint('target_time IS NULL OR target_time >= 0', name=f'ck_{table}_target_time_non_negative'),
        sa.CheckConstraint('pick_time IS NULL OR pick_time >= 0', name=f'ck_{table}_pick_time_non_negative'),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('mobile', sa.String(15), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', _enum('picker', 'supervisor', 'admin'), nullable=False, server_default='picker'),
        sa.Column('hashed_password', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('device_id', sa.String(100), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_mobile', 'users', ['mobile'], unique=True)

    # Scanned items: append-only scan log
    op.create_table(
        'scanned_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('barcode_data', sa.String(500), nullable=False),
        sa.Column('barcode_type', BARCODE_TYPES, nullable=False, server_default='other'),
        sa.Column('order_id', sa.String(100), nullable=True),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('device_id', sa.String(100), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
    )
    for name, column in [
        ('ix_scanned_item_barcode_scanned', 'barcode_data'),
        ('ix_scanned_item_order_scanned', 'order_id'),
        ('ix_scanned_item_user_scanned', 'user_id'),
        ('ix_scanned_item_device_scanned', 'device_id'),
    ]:
        op.create_index(name, 'scanned_items', [column, sa.text('scanned_at DESC')])

    # Live orders
    op.create_table(
        'orders',
        *_order_columns('CASCADE'),
        sa.Column('status', ORDER_STATUSES, nullable=False, server_default='pending'),
        *_timestamps(),
        sa.UniqueConstraint('order_id', name='uq_orders_order_id'),
        *_order_checks('orders'),
    )
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_order_user_status', 'orders', ['user_id', 'status'])
    op.create_index('ix_order_status_created', 'orders', ['status', sa.text('created_at DESC')])

    # Completed orders: one immutable row per order_id
    op.create_table(
        'completed_orders',
        *_order_columns('RESTRICT'),
        sa.Column('status', ORDER_STATUSES, nullable=False, server_default='completed'),
        sa.Column('rack_assigned_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('order_id', name='uq_completed_orders_order_id'),
        *_order_checks('completed_orders'),
    )
    op.create_index('ix_completed_orders_user_id', 'completed_orders', ['user_id'])
    op.create_index('ix_completed_order_user_status', 'completed_orders', ['user_id', 'status'])
    op.create_index(
        'ix_completed_order_status_created', 'completed_orders', ['status', sa.text('created_at DESC')]
    )

    # Order lines
    op.create_table(
        'order_items',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(100), nullable=False),
        sa.Column('item_code', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('category', _enum('Fresh', 'Snacks', 'Grocery', 'Care'), nullable=True),
        sa.Column(
            'status',
            _enum('pending', 'found', 'not_found', 'scanned', 'completed',
                  'picked', 'short', 'on_hold', 'reassigned'),
            nullable=False,
            server_default='pending',
        ),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('quantity >= 1', name='ck_order_items_quantity_positive'),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_item_code', 'order_items', ['item_code'])
    op.create_index('ix_item_order_status', 'order_items', ['order_id', 'status'])

    # Bags
    op.create_table(
        'bags',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('bag_id', sa.String(100), nullable=False),
        sa.Column('order_id', sa.String(100), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'status',
            _enum('scanned', 'in_use', 'photo_taken', 'completed'),
            nullable=False,
            server_default='scanned',
        ),
        sa.Column('size', sa.String(20), nullable=True),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('photo_url', sa.String(1000), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('bag_id', name='uq_bags_bag_id'),
    )
    op.create_index('ix_bags_order_id', 'bags', ['order_id'])
    op.create_index('ix_bag_order_status', 'bags', ['order_id', 'status'])

    # Racks
    op.create_table(
        'racks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('rack_code', sa.String(50), nullable=False),
        sa.Column('rack_identifier', sa.String(20), nullable=False),
        sa.Column('slot_number', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(100), nullable=False),
        sa.Column('zone', sa.String(50), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('current_order_id', sa.String(100), nullable=True),
        sa.Column('rider_name', sa.String(255), nullable=True),
        sa.Column('rider_id', sa.String(100), nullable=True),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('rack_code', name='uq_racks_rack_code'),
        sa.UniqueConstraint('rack_identifier', 'slot_number', name='uq_rack_identifier_slot'),
    )
    op.create_index('ix_racks_rack_identifier', 'racks', ['rack_identifier'])
    op.create_index('ix_rack_zone_available', 'racks', ['zone', 'is_available'])

    # Bin stock
    op.create_table(
        'inventory',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('sku', sa.String(100), nullable=False),
        sa.Column('bin_id', sa.String(100), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column(
            'status',
            _enum('available', 'damaged', 'expired', 'blocked', 'reserved'),
            nullable=False,
            server_default='available',
        ),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('batch_number', sa.String(100), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('sku', 'bin_id', name='uq_inventory_sku_bin'),
        sa.CheckConstraint('quantity >= 0', name='ck_inventory_quantity_non_negative'),
    )
    op.create_index('ix_inventory_sku_status', 'inventory', ['sku', 'status'])
    op.create_index('ix_inventory_bin_status', 'inventory', ['bin_id', 'status'])

    # Pick issues
    op.create_table(
        'pick_issues',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_id', sa.String(100), nullable=False),
        sa.Column('sku', sa.String(100), nullable=False),
        sa.Column('bin_id', sa.String(100), nullable=False),
        sa.Column(
            'issue_type',
            _enum('ITEM_DAMAGED', 'ITEM_MISSING', 'ITEM_EXPIRED', 'WRONG_ITEM'),
            nullable=False,
        ),
        sa.Column('reported_by', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('device_id', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('reported_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_pick_issues_bin_id', 'pick_issues', ['bin_id'])
    op.create_index('ix_pick_issues_reported_by', 'pick_issues', ['reported_by'])
    op.create_index('ix_pick_issue_order_sku', 'pick_issues', ['order_id', 'sku'])
    op.create_index('ix_pick_issue_type_created', 'pick_issues', ['issue_type', sa.text('created_at DESC')])

    # Follow-up tasks
    op.create_table(
        'tasks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('order_id', sa.String(100), nullable=True),
        sa.Column(
            'status',
            _enum('pending', 'in_progress', 'completed', 'cancelled'),
            nullable=False,
            server_default='pending',
        ),
        sa.Column(
            'priority',
            _enum('low', 'medium', 'high', 'urgent'),
            nullable=False,
            server_default='medium',
        ),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_tasks_user_id', 'tasks', ['user_id'])
    op.create_index('ix_task_user_status', 'tasks', ['user_id', 'status'])


def downgrade() -> None:
    op.drop_table('tasks')
    op.drop_table('pick_issues')
    op.drop_table('inventory')
    op.drop_table('racks')
    op.drop_table('bags')
    op.drop_table('order_items')
    op.drop_table('completed_orders')
    op.drop_table('orders')
    op.drop_table('scanned_items')
    op.drop_index('ix_users_mobile', table_name='users')
    op.drop_table('users')
