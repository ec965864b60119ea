"""SQLAlchemy table definitions for Reel.

Domain models are mapped by hand (see ``mappers``). These tables must match
the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("username", String(50), nullable=False, unique=True),
    Column("display_name", String(100), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "role",
        postgresql.ENUM("user", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# VIDEOS TABLE
# ============================================================================
videos_table = Table(
    "videos",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "creator_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", String(200), nullable=False),
    Column("views_count", Integer, nullable=False, server_default="0"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("comments_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("comments_count >= 0", name="ck_videos_comments_count"),
)

Index("idx_videos_creator", videos_table.c.creator_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "video_id", UUID, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    # Subtree deletes go through thread_path, so no ON DELETE action here
    Column("parent_id", UUID, ForeignKey("comments.id"), nullable=True),
    Column("mentions", JSONB, nullable=False, server_default="[]"),
    Column("thread_level", Integer, nullable=False, server_default="0"),
    Column("thread_path", Text, nullable=False, server_default=""),
    Column(
        "moderation_status",
        postgresql.ENUM(
            "pending",
            "approved",
            "rejected",
            name="moderation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="approved",
    ),
    Column("moderation_flags", JSONB, nullable=False, server_default="[]"),
    Column("likes", JSONB, nullable=False, server_default="[]"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column("reports_count", Integer, nullable=False, server_default="0"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edit_history", JSONB, nullable=False, server_default="[]"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("thread_level >= 0 AND thread_level <= 5", name="ck_comments_level"),
    CheckConstraint("replies_count >= 0", name="ck_comments_replies_count"),
)

Index(
    "idx_comments_video_toplevel",
    comments_table.c.video_id,
    comments_table.c.parent_id,
    comments_table.c.moderation_status,
    comments_table.c.created_at,
)
Index("idx_comments_parent", comments_table.c.parent_id, comments_table.c.created_at)
Index("idx_comments_path", comments_table.c.thread_path)
Index(
    "idx_comments_author", comments_table.c.author_id, comments_table.c.created_at
)
