"""Initial schema: users, projects, status history, breakdown, sharing, audit.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ACTIVE_PAIR = sa.text("status IN ('pending', 'approved')")


def _string(length: int) -> sqlmodel.sql.sqltypes.AutoString:
    return sqlmodel.sql.sqltypes.AutoString(length=length)


def upgrade() -> None:
    # 1. Users and roles
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", _string(255), nullable=False),
        sa.Column("full_name", _string(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role", _string(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "role"),
    )

    # 2. Projects and their append-only status history
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", _string(200), nullable=False),
        sa.Column("description", _string(2000), nullable=True),
        sa.Column("status", _string(20), nullable=False, server_default="draft"),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('draft', 'open', 'in_progress', 'review', 'completed', 'cancelled')",
            name="ck_projects_status",
        ),
    )
    op.create_index("ix_projects_title", "projects", ["title"])
    op.create_index("ix_projects_status", "projects", ["status"])
    op.create_index("ix_projects_client_id", "projects", ["client_id"])
    op.create_index("ix_projects_created_at", "projects", ["created_at"])

    op.create_table(
        "project_status_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("from_status", _string(20), nullable=True),
        sa.Column("to_status", _string(20), nullable=False),
        sa.Column("changed_by", sa.Uuid(), nullable=True),
        sa.Column("reason", _string(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["changed_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_project_status_history_project_created",
        "project_status_history",
        ["project_id", "created_at"],
    )

    # 3. Breakdown: sequences > shots > tasks
    op.create_table(
        "sequences",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("name", _string(200), nullable=False),
        sa.Column("description", _string(1000), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", _string(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sequences_project_id", "sequences", ["project_id"])

    op.create_table(
        "shots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("sequence_id", sa.Uuid(), nullable=False),
        sa.Column("name", _string(200), nullable=False),
        sa.Column("description", _string(1000), nullable=True),
        sa.Column("frame_start", sa.Integer(), nullable=False, server_default="1001"),
        sa.Column("frame_end", sa.Integer(), nullable=False, server_default="1100"),
        sa.Column("status", _string(20), nullable=False, server_default="pending"),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["sequence_id"], ["sequences.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shots_sequence_id", "shots", ["sequence_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("shot_id", sa.Uuid(), nullable=False),
        sa.Column("name", _string(200), nullable=False),
        sa.Column("description", _string(1000), nullable=True),
        sa.Column("task_type", _string(50), nullable=False, server_default="general"),
        sa.Column("status", _string(20), nullable=False, server_default="todo"),
        sa.Column("priority", _string(20), nullable=False, server_default="medium"),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["shot_id"], ["shots.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assigned_to"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tasks_shot_id", "tasks", ["shot_id"])

    # 4. Shared task grants
    op.create_table(
        "shared_tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("task_id", sa.Uuid(), nullable=False),
        sa.Column("studio_id", sa.Uuid(), nullable=False),
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("access_level", _string(20), nullable=False, server_default="view"),
        sa.Column("status", _string(20), nullable=False, server_default="pending"),
        sa.Column("notes", _string(1000), nullable=True),
        sa.Column("shared_at", sa.DateTime(), nullable=False),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("approved_by", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["studio_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["artist_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["approved_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "access_level IN ('view', 'comment', 'edit')", name="ck_shared_tasks_access_level"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'revoked')",
            name="ck_shared_tasks_status",
        ),
    )
    op.create_index("ix_shared_tasks_task_id", "shared_tasks", ["task_id"])
    op.create_index("ix_shared_tasks_studio_id", "shared_tasks", ["studio_id"])
    op.create_index("ix_shared_tasks_artist_status", "shared_tasks", ["artist_id", "status"])
    # At most one pending-or-approved grant per (task, artist)
    op.create_index(
        "uq_shared_tasks_active_pair",
        "shared_tasks",
        ["task_id", "artist_id"],
        unique=True,
        postgresql_where=_ACTIVE_PAIR,
    )

    # 5. Audit log
    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("action", _string(50), nullable=False),
        sa.Column("entity_type", _string(50), nullable=False),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("changes", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("ip_address", _string(45), nullable=True),
        sa.Column("user_agent", _string(500), nullable=True),
        sa.Column("request_id", _string(36), nullable=True),
        sa.Column("status", _string(20), nullable=False, server_default="success"),
        sa.Column("error_message", _string(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_user_created", "audit_logs", ["user_id", "created_at"])
    op.create_index("ix_audit_logs_action_created", "audit_logs", ["action", "created_at"])
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_index("uq_shared_tasks_active_pair", table_name="shared_tasks")
    op.drop_table("shared_tasks")
    op.drop_table("tasks")
    op.drop_table("shots")
    op.drop_table("sequences")
    op.drop_index(
        "ix_project_status_history_project_created", table_name="project_status_history"
    )
    op.drop_table("project_status_history")
    op.drop_table("projects")
    op.drop_table("user_roles")
    op.drop_table("users")
