"""create project, sprint, epic, story, task and dependency tables

Revision ID: 3a9c1e7b52d4
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a9c1e7b52d4"
down_revision = None
branch_labels = None
depends_on = None


TASK_STATUS = sa.Enum(
    "TODO", "IN_PROGRESS", "IN_REVIEW", "TESTING", "COMPLETED", "CANCELLED", name="taskstatus"
)
STORY_STATUS = sa.Enum(
    "DRAFT", "READY", "IN_PROGRESS", "TESTING", "COMPLETED", "CANCELLED", name="storystatus"
)
EPIC_STATUS = sa.Enum("DRAFT", "READY", "IN_PROGRESS", "COMPLETED", "CANCELLED", name="epicstatus")
SPRINT_STATUS = sa.Enum("PLANNING", "ACTIVE", "COMPLETED", "CANCELLED", name="sprintstatus")
DEPENDENCY_TYPE = sa.Enum(
    "FINISH_TO_START",
    "START_TO_START",
    "FINISH_TO_FINISH",
    "START_TO_FINISH",
    name="dependencytype",
)


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "sprints",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", SPRINT_STATUS, nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_sprints_project_id", "sprints", ["project_id"])
    op.create_table(
        "epics",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", EPIC_STATUS, nullable=False),
        sa.Column("priority", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_epics_project_id", "epics", ["project_id"])
    op.create_table(
        "user_stories",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("epic_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("status", STORY_STATUS, nullable=False),
        sa.Column("sprint_id", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["epic_id"], ["epics.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sprint_id"], ["sprints.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_user_stories_epic_id", "user_stories", ["epic_id"])
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_story_id", sa.String(), nullable=True),
        sa.Column("sprint_id", sa.String(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", TASK_STATUS, nullable=False),
        sa.ForeignKeyConstraint(["user_story_id"], ["user_stories.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sprint_id"], ["sprints.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_user_story_id", "tasks", ["user_story_id"])
    op.create_table(
        "task_dependencies",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("depends_on_id", sa.String(), nullable=False),
        sa.Column("type", DEPENDENCY_TYPE, nullable=False),
        sa.Column("lag_days", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["depends_on_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("task_id", "depends_on_id", name="uq_task_dependency_pair"),
    )
    op.create_index("idx_dep_task", "task_dependencies", ["task_id"])
    op.create_index("idx_dep_depends_on", "task_dependencies", ["depends_on_id"])


def downgrade() -> None:
    op.drop_index("idx_dep_depends_on", table_name="task_dependencies")
    op.drop_index("idx_dep_task", table_name="task_dependencies")
    op.drop_table("task_dependencies")
    op.drop_index("idx_tasks_user_story_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("idx_user_stories_epic_id", table_name="user_stories")
    op.drop_table("user_stories")
    op.drop_index("idx_epics_project_id", table_name="epics")
    op.drop_table("epics")
    op.drop_index("idx_sprints_project_id", table_name="sprints")
    op.drop_table("sprints")
    op.drop_table("projects")
