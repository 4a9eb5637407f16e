"""Create class scheduling tables

Revision ID: c001_class_scheduling
Revises:
Create Date: 2026-10-19

This migration creates the tables for gym class scheduling:
- class_types: Catalog of class kinds and their default capacity
- class_schedules: Weekly templates sessions are generated from
- class_sessions: Dated occurrences with seat counters
- class_waitlist: FIFO queue for full sessions
- class_enrollments: Seats held by students
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'c001_class_scheduling'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'class_types',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('max_capacity', sa.Integer(), nullable=False, server_default='20'),
        sa.Column('color', sa.String(20), nullable=False, server_default='#3b82f6'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('duration_minutes > 0', name='check_class_type_duration_positive'),
        sa.CheckConstraint('max_capacity > 0', name='check_class_type_capacity_positive'),
    )

    op.create_table(
        'class_schedules',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_type_id', sa.String(), sa.ForeignKey('class_types.id'), nullable=False),
        sa.Column('professor_id', sa.String(), nullable=True),  # No FK - staff live in another service
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('max_capacity', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='check_schedule_day_of_week'),
        sa.CheckConstraint('end_time > start_time', name='check_schedule_time_order'),
        sa.CheckConstraint('max_capacity IS NULL OR max_capacity > 0', name='check_schedule_capacity_positive'),
    )
    op.create_index('ix_class_schedules_class_type_id', 'class_schedules', ['class_type_id'])

    op.create_table(
        'class_sessions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_type_id', sa.String(), sa.ForeignKey('class_types.id'), nullable=False),
        sa.Column('class_schedule_id', sa.String(), sa.ForeignKey('class_schedules.id'), nullable=True),
        sa.Column('professor_id', sa.String(), nullable=True),
        sa.Column('session_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),

        # Seat accounting
        sa.Column('max_capacity', sa.Integer(), nullable=False),
        sa.Column('current_enrollment_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('held_seats', sa.Integer(), nullable=False, server_default='0'),

        sa.Column('status', sa.String(20), nullable=False, server_default='scheduled'),
        sa.Column('cancelled_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),

        sa.UniqueConstraint('class_schedule_id', 'session_date', name='unique_schedule_session_date'),
        sa.CheckConstraint('max_capacity > 0', name='check_session_capacity_positive'),
        sa.CheckConstraint('current_enrollment_count >= 0', name='check_session_count_positive'),
        sa.CheckConstraint('held_seats >= 0', name='check_session_held_positive'),
        sa.CheckConstraint(
            'current_enrollment_count + held_seats <= max_capacity',
            name='check_session_count_lte_capacity',
        ),
        sa.CheckConstraint(
            "status IN ('scheduled', 'in_progress', 'completed', 'cancelled')",
            name='check_session_status',
        ),
    )
    op.create_index('ix_class_sessions_class_type_id', 'class_sessions', ['class_type_id'])
    op.create_index('ix_class_sessions_class_schedule_id', 'class_sessions', ['class_schedule_id'])
    op.create_index('ix_class_sessions_session_date', 'class_sessions', ['session_date'])

    op.create_table(
        'class_waitlist',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_session_id', sa.String(), sa.ForeignKey('class_sessions.id'), nullable=False),
        sa.Column('student_id', sa.String(), nullable=False),  # No FK - leads live in the CRM

        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='waiting'),

        # Timestamps
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('notified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('offer_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expired_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),

        sa.CheckConstraint('position >= 1', name='check_waitlist_position_positive'),
        sa.CheckConstraint(
            "status IN ('waiting', 'notified', 'enrolled', 'expired', 'cancelled')",
            name='check_waitlist_status',
        ),
    )
    op.create_index('ix_class_waitlist_class_session_id', 'class_waitlist', ['class_session_id'])
    op.create_index('ix_class_waitlist_student_id', 'class_waitlist', ['student_id'])
    op.create_index(
        'idx_class_waitlist_session_status_position',
        'class_waitlist',
        ['class_session_id', 'status', 'position'],
    )
    op.create_index(
        'uq_active_waitlist_session_student',
        'class_waitlist',
        ['class_session_id', 'student_id'],
        unique=True,
        postgresql_where=sa.text("status IN ('waiting', 'notified')"),
        sqlite_where=sa.text("status IN ('waiting', 'notified')"),
    )

    op.create_table(
        'class_enrollments',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_session_id', sa.String(), sa.ForeignKey('class_sessions.id'), nullable=False),
        sa.Column('student_id', sa.String(), nullable=False),
        sa.Column('waitlist_entry_id', sa.String(), sa.ForeignKey('class_waitlist.id'), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='enrolled'),

        # Timestamps
        sa.Column('enrolled_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('no_show_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),

        sa.CheckConstraint(
            "status IN ('enrolled', 'confirmed', 'attended', 'no_show', 'cancelled')",
            name='check_enrollment_status',
        ),
    )
    op.create_index('ix_class_enrollments_class_session_id', 'class_enrollments', ['class_session_id'])
    op.create_index('ix_class_enrollments_student_id', 'class_enrollments', ['student_id'])
    op.create_index(
        'uq_active_enrollment_session_student',
        'class_enrollments',
        ['class_session_id', 'student_id'],
        unique=True,
        postgresql_where=sa.text("status IN ('enrolled', 'confirmed')"),
        sqlite_where=sa.text("status IN ('enrolled', 'confirmed')"),
    )


def downgrade() -> None:
    op.drop_index('uq_active_enrollment_session_student', table_name='class_enrollments')
    op.drop_index('ix_class_enrollments_student_id', table_name='class_enrollments')
    op.drop_index('ix_class_enrollments_class_session_id', table_name='class_enrollments')
    op.drop_table('class_enrollments')

    op.drop_index('uq_active_waitlist_session_student', table_name='class_waitlist')
    op.drop_index('idx_class_waitlist_session_status_position', table_name='class_waitlist')
    op.drop_index('ix_class_waitlist_student_id', table_name='class_waitlist')
    op.drop_index('ix_class_waitlist_class_session_id', table_name='class_waitlist')
    op.drop_table('class_waitlist')

    op.drop_index('ix_class_sessions_session_date', table_name='class_sessions')
    op.drop_index('ix_class_sessions_class_schedule_id', table_name='class_sessions')
    op.drop_index('ix_class_sessions_class_type_id', table_name='class_sessions')
    op.drop_table('class_sessions')

    op.drop_index('ix_class_schedules_class_type_id', table_name='class_schedules')
    op.drop_table('class_schedules')

    op.drop_table('class_types')
