"""Initial adoption tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Create categories table
    op.create_table('categories',
        sa.Column('category_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('category_name', sa.String(length=100), nullable=False, comment='Unique category name'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('category_id'),
        sa.UniqueConstraint('category_name')
    )

    # Create users table
    op.create_table('users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('user_id')
    )
    op.create_index('ix_users_email', 'users', ['email'])

    # Create vendors table
    op.create_table('vendors',
        sa.Column('vendor_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('vendor_name', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('vendor_id')
    )
    op.create_index('ix_vendors_email', 'vendors', ['email'])

    # Create pets table
    op.create_table('pets',
        sa.Column('pet_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, comment="Pet's name"),
        sa.Column('category_name', sa.String(length=100), nullable=True, comment='Category name, e.g. Dog'),
        sa.Column('breed', sa.String(length=100), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True, comment='Age in years'),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True, comment='Where the pet can be visited'),
        sa.Column('status', sa.String(length=50), server_default='Available', nullable=False, comment='Current adoption status'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('vendor_id', sa.Integer(), nullable=True, comment='Vendor that listed the pet'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('pet_id')
    )
    op.create_index('ix_pets_category_name', 'pets', ['category_name'])
    op.create_index('ix_pets_status', 'pets', ['status'])
    op.create_index('ix_pets_vendor_id', 'pets', ['vendor_id'])
    op.create_index('idx_pets_category_location', 'pets', ['category_name', 'location'])

    # Create adoption_bookings table; pet_id is a soft reference to pets
    op.create_table('adoption_bookings',
        sa.Column('booking_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('pet_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True, comment='Adopter that made the booking'),
        sa.Column('booking_date', sa.DateTime(timezone=True), nullable=True, comment='Requested visit date'),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('booking_id')
    )
    op.create_index('ix_adoption_bookings_pet_id', 'adoption_bookings', ['pet_id'])
    op.create_index('ix_adoption_bookings_user_id', 'adoption_bookings', ['user_id'])

    # Create pet_status_change_log table; pet_id is a soft reference to pets
    op.create_table('pet_status_change_log',
        sa.Column('log_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('pet_id', sa.Integer(), nullable=False),
        sa.Column('old_status', sa.String(length=50), nullable=True),
        sa.Column('new_status', sa.String(length=50), nullable=False),
        sa.Column('changed_by', sa.String(length=255), nullable=True, comment='Who requested the change'),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('changed_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('log_id')
    )
    op.create_index('idx_status_log_pet_log', 'pet_status_change_log', ['pet_id', 'log_id'])


def downgrade() -> None:
    op.drop_index('idx_status_log_pet_log', table_name='pet_status_change_log')
    op.drop_table('pet_status_change_log')

    op.drop_index('ix_adoption_bookings_user_id', table_name='adoption_bookings')
    op.drop_index('ix_adoption_bookings_pet_id', table_name='adoption_bookings')
    op.drop_table('adoption_bookings')

    op.drop_index('idx_pets_category_location', table_name='pets')
    op.drop_index('ix_pets_vendor_id', table_name='pets')
    op.drop_index('ix_pets_status', table_name='pets')
    op.drop_index('ix_pets_category_name', table_name='pets')
    op.drop_table('pets')

    op.drop_index('ix_vendors_email', table_name='vendors')
    op.drop_table('vendors')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    op.drop_table('categories')
