"""Initial schema - users and submissions.

Revision ID: 0001_initial
Revises:
Create Date: 2026-01-01

"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic
revision = "0001_initial"
down_revision: str | None = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create users table; id is the identity provider subject id
    op.create_table(
        "users",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("first_name", sa.String, nullable=True),
        sa.Column("last_name", sa.String, nullable=True),
        sa.Column("profile_image_url", sa.String, nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="agent"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.UniqueConstraint("email", name="users_email_key"),
        sa.CheckConstraint("role IN ('agent', 'manager', 'admin')", name="ck_users_role"),
    )

    # Create submissions table
    op.create_table(
        "submissions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("client_name", sa.Text, nullable=False),
        sa.Column("government", sa.Text, nullable=False),
        sa.Column("atm_code", sa.Text, nullable=False),
        sa.Column("service_type", sa.String(20), nullable=False),
        sa.Column("agent_id", sa.String, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        sa.CheckConstraint(
            "service_type IN ('feeding', 'maintenance')",
            name="ck_submissions_service_type",
        ),
    )
    op.create_index("ix_submissions_agent_id", "submissions", ["agent_id"])
    op.create_index("ix_submissions_created_at", "submissions", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_submissions_created_at", table_name="submissions")
    op.drop_index("ix_submissions_agent_id", table_name="submissions")
    op.drop_table("submissions")
    op.drop_table("users")
