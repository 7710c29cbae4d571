"""SQLAlchemy table definitions for SkillNet.

These tables are used through SQLAlchemy Core; rows are mapped to the
frozen domain models in ``mappers``. They match the schema created by the
Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# LEARNING REQUESTS TABLE
# ============================================================================
learning_requests_table = Table(
    "learning_requests",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("owner_id", UUID, nullable=False),
    Column("kind", String(20), nullable=False),  # 'one-to-one', 'group'
    Column("title", String(300), nullable=False),
    Column("topic", String(300), nullable=False, server_default=""),
    Column("description", Text, nullable=False, server_default=""),
    Column("subject", String(100), nullable=False, server_default=""),
    Column("status", String(20), nullable=False, server_default="draft"),
    Column("max_participants", Integer, nullable=False, server_default="1"),
    Column("participants", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("accepted_by", UUID, nullable=True),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    # Meeting reference, all three set together after provisioning
    Column("meeting_id", String(255), nullable=True),
    Column("meeting_join_url", Text, nullable=True),
    Column("meeting_status", String(20), nullable=True),
    Column("response_count", Integer, nullable=False, server_default="0"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    # Incremented by every conditional write
    Column("version", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column("completed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("archived_at", TIMESTAMP(timezone=True), nullable=True),
    Column("cancelled_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expired_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("max_participants >= 1", name="check_max_participants_positive"),
    CheckConstraint(
        "cardinality(participants) <= max_participants",
        name="check_participants_within_capacity",
    ),
    CheckConstraint("response_count >= 0", name="check_response_count_non_negative"),
    CheckConstraint("view_count >= 0", name="check_view_count_non_negative"),
)

Index("idx_learning_requests_owner_id", learning_requests_table.c.owner_id)
Index(
    "idx_learning_requests_status_created_at",
    learning_requests_table.c.status,
    learning_requests_table.c.created_at.desc(),
)

# ============================================================================
# REQUEST RESPONSES TABLE (append-only)
# ============================================================================
request_responses_table = Table(
    "request_responses",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "request_id",
        UUID,
        ForeignKey("learning_requests.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("responder_id", UUID, nullable=False),
    Column("request_owner_id", UUID, nullable=False),
    Column("decision", String(20), nullable=False),
    Column("message", Text, nullable=False, server_default=""),
    Column("meeting_id", String(255), nullable=True),
    Column("meeting_join_url", Text, nullable=True),
    Column("meeting_status", String(20), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_request_responses_request_id", request_responses_table.c.request_id)
Index("idx_request_responses_responder_id", request_responses_table.c.responder_id)

# ============================================================================
# HIDDEN MARKS TABLE (per-viewer suppression)
# ============================================================================
hidden_marks_table = Table(
    "hidden_marks",
    metadata,
    Column("viewer_id", UUID, nullable=False),
    Column(
        "request_id",
        UUID,
        ForeignKey("learning_requests.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "hidden_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("viewer_id", "request_id", name="uq_hidden_mark_viewer_request"),
)

Index("idx_hidden_marks_viewer_id", hidden_marks_table.c.viewer_id)
