"""initial_schema

Create the request lifecycle schema:
- Learning requests (one-to-one and group, versioned for conditional writes)
- Request responses (append-only, cascade with their request)
- Hidden marks (per-viewer suppression, unique per viewer and request)

Revision ID: 3c6f1d2a9b47
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c6f1d2a9b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # LEARNING_REQUESTS table
    # ========================================================================
    op.create_table(
        "learning_requests",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),  # 'one-to-one', 'group'
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("topic", sa.String(300), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("subject", sa.String(100), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("max_participants", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "participants",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("accepted_by", sa.UUID(), nullable=True),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("meeting_id", sa.String(255), nullable=True),
        sa.Column("meeting_join_url", sa.Text(), nullable=True),
        sa.Column("meeting_status", sa.String(20), nullable=True),
        sa.Column("response_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("completed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("archived_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expired_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "max_participants >= 1", name="check_max_participants_positive"
        ),
        sa.CheckConstraint(
            "cardinality(participants) <= max_participants",
            name="check_participants_within_capacity",
        ),
        sa.CheckConstraint(
            "response_count >= 0", name="check_response_count_non_negative"
        ),
        sa.CheckConstraint("view_count >= 0", name="check_view_count_non_negative"),
    )
    op.create_index(
        "idx_learning_requests_owner_id", "learning_requests", ["owner_id"]
    )
    op.create_index(
        "idx_learning_requests_status_created_at",
        "learning_requests",
        ["status", sa.text("created_at DESC")],
    )

    # ========================================================================
    # REQUEST_RESPONSES table (append-only)
    # ========================================================================
    op.create_table(
        "request_responses",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("request_id", sa.UUID(), nullable=False),
        sa.Column("responder_id", sa.UUID(), nullable=False),
        sa.Column("request_owner_id", sa.UUID(), nullable=False),
        sa.Column("decision", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("meeting_id", sa.String(255), nullable=True),
        sa.Column("meeting_join_url", sa.Text(), nullable=True),
        sa.Column("meeting_status", sa.String(20), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["request_id"], ["learning_requests.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_request_responses_request_id", "request_responses", ["request_id"]
    )
    op.create_index(
        "idx_request_responses_responder_id", "request_responses", ["responder_id"]
    )

    # ========================================================================
    # HIDDEN_MARKS table (per-viewer suppression)
    # ========================================================================
    op.create_table(
        "hidden_marks",
        sa.Column("viewer_id", sa.UUID(), nullable=False),
        sa.Column("request_id", sa.UUID(), nullable=False),
        sa.Column(
            "hidden_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["request_id"], ["learning_requests.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "viewer_id", "request_id", name="uq_hidden_mark_viewer_request"
        ),
    )
    op.create_index("idx_hidden_marks_viewer_id", "hidden_marks", ["viewer_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_index("idx_hidden_marks_viewer_id", table_name="hidden_marks")
    op.drop_table("hidden_marks")

    op.drop_index("idx_request_responses_responder_id", table_name="request_responses")
    op.drop_index("idx_request_responses_request_id", table_name="request_responses")
    op.drop_table("request_responses")

    op.drop_index(
        "idx_learning_requests_status_created_at", table_name="learning_requests"
    )
    op.drop_index("idx_learning_requests_owner_id", table_name="learning_requests")
    op.drop_table("learning_requests")
