"""create_dispatch_tables

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f0a9d2b7e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'drivers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_drivers_id'), 'drivers', ['id'], unique=False)
    op.create_index(op.f('ix_drivers_email'), 'drivers', ['email'], unique=True)

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('type', sa.Enum('airport', 'hotel', 'other', name='locationtype'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_locations_id'), 'locations', ['id'], unique=False)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('pickup_date', sa.Date(), nullable=False),
        sa.Column('pickup_time', sa.Time(), nullable=False),
        sa.Column('flight_number', sa.String(), nullable=False),
        sa.Column('pickup_location', sa.String(), nullable=False),
        sa.Column('dropoff_location', sa.String(), nullable=False),
        sa.Column('number_of_passengers', sa.Integer(), nullable=False),
        sa.Column('driver_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.Enum('Assigned', 'Unassigned', name='jobstatus'), nullable=False),
        sa.Column('driver_picked_up_at', sa.DateTime(), nullable=True),
        sa.Column('driver_dropped_off_at', sa.DateTime(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        sa.Column('recurrence_frequency', sa.Enum('daily', 'weekly', 'monthly', name='recurrencefrequency'), nullable=True),
        sa.Column('recurrence_count', sa.Integer(), nullable=True),
        sa.Column('flight_status', sa.String(), nullable=True),
        sa.Column('flight_status_updated_at', sa.DateTime(), nullable=True),
        sa.Column('flight_status_data', sa.Text(), nullable=True,
                  comment='Serialized snapshot of the last provider response'),
        sa.ForeignKeyConstraint(['driver_id'], ['drivers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
    op.create_index(op.f('ix_jobs_pickup_date'), 'jobs', ['pickup_date'], unique=False)
    op.create_index(op.f('ix_jobs_flight_number'), 'jobs', ['flight_number'], unique=False)
    op.create_index(op.f('ix_jobs_driver_id'), 'jobs', ['driver_id'], unique=False)


def downgrade() -> None:
    op.drop_table('jobs')
    op.drop_table('locations')
    op.drop_table('drivers')

    # Drop all enum types
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for enum in ['jobstatus', 'recurrencefrequency', 'locationtype']:
            op.execute(f"DROP TYPE IF EXISTS {enum}")
