"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

system_role = sa.Enum('USER', 'ADMIN', 'SUPER_ADMIN', name='systemrole')
current_role = sa.Enum('ATTENDEE', 'VOLUNTEER', name='currentrole')
event_status = sa.Enum('DRAFT', 'PUBLISHED', 'COMPLETED', 'CANCELLED', name='eventstatus')
volunteer_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='volunteerstatus')
attendance_status = sa.Enum('REGISTERED', 'JOINED', 'LEFT_EARLY', 'NO_SHOW', name='attendancestatus')
notification_type = sa.Enum(
    'ANNOUNCEMENT', 'APPLICATION_UPDATE', 'SYSTEM_ALERT', 'EVENT_REMINDER', 'TASK_ASSIGNMENT',
    name='notificationtype',
)
task_status = sa.Enum('PENDING', 'IN_PROGRESS', 'COMPLETED', name='taskstatus')
comment_status = sa.Enum('ACTIVE', 'DELETED', name='commentstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('system_role', system_role, nullable=False),
        sa.Column('current_role', current_role, nullable=False),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])

    op.create_table(
        'event_categories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('image', sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'events',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('location_desc', sa.String(), nullable=False),
        sa.Column('status', event_status, nullable=False),
        sa.Column('accepting_volunteers', sa.Boolean(), nullable=False),
        sa.Column('profile_image', sa.String(), nullable=True),
        sa.Column('cover_image', sa.String(), nullable=True),
        sa.Column('location_image', sa.String(), nullable=True),
        sa.Column('organizer_id', sa.String(length=36), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organizer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['category_id'], ['event_categories.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_events_date_time', 'events', ['date_time'])
    op.create_index('ix_events_status', 'events', ['status'])
    op.create_index('ix_events_organizer_id', 'events', ['organizer_id'])
    op.create_index('ix_events_category_id', 'events', ['category_id'])
    op.create_index('ix_events_deleted_at', 'events', ['deleted_at'])

    op.create_table(
        'event_volunteers',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('status', volunteer_status, nullable=False),
        sa.Column('motivation', sa.Text(), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('user_id', 'event_id'),
    )

    op.create_table(
        'event_attendances',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('status', attendance_status, nullable=False),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_out_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('updated_by_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.ForeignKeyConstraint(['updated_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('user_id', 'event_id'),
    )
    op.create_index('ix_event_attendances_status', 'event_attendances', ['status'])

    op.create_table(
        'event_interests',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('interested_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('user_id', 'event_id'),
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('type', notification_type, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=True),
        sa.Column('announcement_id', sa.String(length=36), nullable=True),
        sa.Column('application_id', sa.String(length=80), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_event_id', 'notifications', ['event_id'])
    op.create_index('ix_notifications_read', 'notifications', ['read'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=100), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', task_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tasks_event_id', 'tasks', ['event_id'])

    op.create_table(
        'task_assignments',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('task_id', sa.String(length=36), nullable=False),
        sa.Column('volunteer_id', sa.String(length=36), nullable=False),
        sa.Column('assigned_by_id', sa.String(length=36), nullable=False),
        sa.Column('status', task_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['task_id'], ['tasks.id']),
        sa.ForeignKeyConstraint(['volunteer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['assigned_by_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('task_id', 'volunteer_id', name='uq_task_assignment'),
    )
    op.create_index('ix_task_assignments_task_id', 'task_assignments', ['task_id'])
    op.create_index('ix_task_assignments_volunteer_id', 'task_assignments', ['volunteer_id'])

    op.create_table(
        'comment_ratings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('comment_text', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('status', comment_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_comment_rating_range'),
    )
    op.create_index('ix_comment_ratings_event_id', 'comment_ratings', ['event_id'])
    op.create_index('ix_comment_ratings_user_id', 'comment_ratings', ['user_id'])
    op.create_index('ix_comment_ratings_status', 'comment_ratings', ['status'])


def downgrade() -> None:
    for table in (
        'comment_ratings',
        'task_assignments',
        'tasks',
        'notifications',
        'event_interests',
        'event_attendances',
        'event_volunteers',
        'events',
        'event_categories',
        'users',
    ):
        op.drop_table(table)
    for enum in (
        comment_status,
        task_status,
        notification_type,
        attendance_status,
        volunteer_status,
        event_status,
        current_role,
        system_role,
    ):
        enum.drop(op.get_bind(), checkfirst=True)
