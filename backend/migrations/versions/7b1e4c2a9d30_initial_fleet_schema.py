"""initial fleet schema: users, vehicles, vehicle drivers, trips

Revision ID: 7b1e4c2a9d30
Revises:
Create Date: 2026-10-17 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7b1e4c2a9d30'
down_revision = None
branch_labels = None
depends_on = None

USER_ROLE = sa.Enum('customer', 'driver', 'owner', 'admin', name='user_role')
VEHICLE_STATUS = sa.Enum('available', 'booked', 'maintenance', name='vehicle_status')
TRIP_STATUS = sa.Enum(
    'pending', 'confirmed', 'ongoing', 'completed', 'cancelled', name='trip_status'
)


def _audit_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('role', USER_ROLE, nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'vehicles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('make', sa.String(length=60), nullable=False),
        sa.Column('model', sa.String(length=60), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('license_plate', sa.String(length=20), nullable=False),
        sa.Column('status', VEHICLE_STATUS, nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['users.id'], name='fk_vehicles_owner_id_users', ondelete='RESTRICT'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_vehicles'),
        sa.UniqueConstraint('license_plate', name='uq_vehicles_license_plate'),
    )
    op.create_index('ix_vehicles_owner_id', 'vehicles', ['owner_id'])
    op.create_index('ix_vehicles_status', 'vehicles', ['status'])

    op.create_table(
        'vehicle_drivers',
        sa.Column('vehicle_id', sa.Integer(), nullable=False),
        sa.Column('driver_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['driver_id'], ['users.id'], name='fk_vehicle_drivers_driver_id_users', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['vehicle_id'], ['vehicles.id'], name='fk_vehicle_drivers_vehicle_id_vehicles', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('vehicle_id', 'driver_id', name='pk_vehicle_drivers'),
    )

    op.create_table(
        'trips',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), nullable=False),
        sa.Column('driver_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', TRIP_STATUS, nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ['customer_id'], ['users.id'], name='fk_trips_customer_id_users', ondelete='RESTRICT'
        ),
        sa.ForeignKeyConstraint(
            ['driver_id'], ['users.id'], name='fk_trips_driver_id_users', ondelete='RESTRICT'
        ),
        sa.ForeignKeyConstraint(
            ['vehicle_id'], ['vehicles.id'], name='fk_trips_vehicle_id_vehicles', ondelete='RESTRICT'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_trips'),
    )
    op.create_index('ix_trips_customer_id', 'trips', ['customer_id'])
    op.create_index('ix_trips_driver_id', 'trips', ['driver_id'])
    op.create_index('ix_trips_vehicle_start', 'trips', ['vehicle_id', 'start_time'])


def downgrade():
    op.drop_index('ix_trips_vehicle_start', table_name='trips')
    op.drop_index('ix_trips_driver_id', table_name='trips')
    op.drop_index('ix_trips_customer_id', table_name='trips')
    op.drop_table('trips')
    op.drop_table('vehicle_drivers')
    op.drop_index('ix_vehicles_status', table_name='vehicles')
    op.drop_index('ix_vehicles_owner_id', table_name='vehicles')
    op.drop_table('vehicles')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_table('users')
    bind = op.get_bind()
    for enum_type in (TRIP_STATUS, VEHICLE_STATUS, USER_ROLE):
        enum_type.drop(bind, checkfirst=True)
