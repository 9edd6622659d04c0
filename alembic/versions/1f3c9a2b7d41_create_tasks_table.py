"""create tasks table

Revision ID: 1f3c9a2b7d41
Revises:
Create Date: 2024-05-10 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1f3c9a2b7d41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

task_status_enum = sa.Enum('pending', 'done', 'in_progress', 'paused', name='task_status_enum')
task_priority_enum = sa.Enum('red', 'yellow', 'blue', name='task_priority_enum')


def upgrade() -> None:
    # Enum types are created along with the table on Postgres
    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', task_status_enum, nullable=False, server_default='pending'),
        sa.Column('priority', task_priority_enum, nullable=False, server_default='blue'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('name', name='uq_tasks_name'),
    )
    op.create_index('ix_tasks_id', 'tasks', ['id'])


def downgrade() -> None:
    op.drop_index('ix_tasks_id', table_name='tasks')
    op.drop_table('tasks')
    # Drop the enum types explicitly (no-op on backends without native enums)
    task_priority_enum.drop(op.get_bind(), checkfirst=True)
    task_status_enum.drop(op.get_bind(), checkfirst=True)
