"""initial_schema

Create the schema for the Reel comment core:
- Users (authors, with role for moderation rights)
- Videos (comment counter owner)
- Comments (threaded up to level 5 via a materialized ancestor path)

Revision ID: 3c1f0b7a9d42
Revises:
Create Date: 2026-10-19 09:12:04.318220

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7a9d42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM ('user', 'admin');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE moderation_status AS ENUM ('pending', 'approved', 'rejected');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM("user", "admin", name="user_role", create_type=False),
            nullable=False,
            server_default="user",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    # ========================================================================
    # VIDEOS table
    # ========================================================================
    op.create_table(
        "videos",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("views_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comments_count", sa.Integer(), nullable=False, server_default="0"),
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
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("comments_count >= 0", name="ck_videos_comments_count"),
    )
    op.create_index("idx_videos_creator", "videos", ["creator_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("video_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column(
            "mentions",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("thread_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("thread_path", sa.Text(), nullable=False, server_default=""),
        sa.Column(
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
        sa.Column(
            "moderation_flags",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "likes",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reports_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "edit_history",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
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
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        # NO ACTION is checked at statement end, so a single subtree DELETE passes
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"]),
        sa.CheckConstraint(
            "thread_level >= 0 AND thread_level <= 5", name="ck_comments_level"
        ),
        sa.CheckConstraint("replies_count >= 0", name="ck_comments_replies_count"),
    )
    op.create_index(
        "idx_comments_video_toplevel",
        "comments",
        ["video_id", "parent_id", "moderation_status", "created_at"],
    )
    op.create_index("idx_comments_parent", "comments", ["parent_id", "created_at"])
    op.create_index("idx_comments_path", "comments", ["thread_path"])
    op.create_index("idx_comments_author", "comments", ["author_id", "created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_author", table_name="comments")
    op.drop_index("idx_comments_path", table_name="comments")
    op.drop_index("idx_comments_parent", table_name="comments")
    op.drop_index("idx_comments_video_toplevel", table_name="comments")
    op.drop_table("comments")

    op.drop_index("idx_videos_creator", table_name="videos")
    op.drop_table("videos")

    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS moderation_status")
    op.execute("DROP TYPE IF EXISTS user_role")
