"""initial_schema

Create the discussion engine schema:
- Posts (optionally inside a group)
- Comments (threaded through parent_id)
- Votes (one signed vote per user per post or comment)
- Friendships (undirected, stored once)
- Feed cursors (per-session pagination state)

Revision ID: 3c1f0a9d7e42
Revises:
Create Date: 2026-10-19 10:12:44.218305

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE votable_type AS ENUM ('post', 'comment');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # POSTS
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("group_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_posts_created_at",
        "posts",
        [sa.text("created_at DESC"), "id"],
    )
    op.create_index("idx_posts_author_id", "posts", ["author_id"])
    op.create_index("idx_posts_group_id", "posts", ["group_id"])

    # ========================================================================
    # COMMENTS
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_post_id", "comments", ["post_id", "created_at"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # VOTES
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "votable_type",
            postgresql.ENUM("post", "comment", name="votable_type", create_type=False),
            nullable=False,
        ),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
        sa.CheckConstraint("value IN (-1, 1)", name="vote_value_signed_unit"),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # FRIENDSHIPS
    # ========================================================================
    op.create_table(
        "friendships",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("friend_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "friend_id", name="unique_friendship"),
        sa.CheckConstraint("user_id <> friend_id", name="friendship_not_self"),
    )
    op.create_index("idx_friendships_friend_id", "friendships", ["friend_id"])

    # ========================================================================
    # FEED CURSORS
    # ========================================================================
    op.create_table(
        "feed_cursors",
        sa.Column("session_id", sa.String(length=255), nullable=False),
        sa.Column("feed_key", sa.String(length=255), nullable=False),
        sa.Column(
            "next_page", sa.Integer(), server_default=sa.text("1"), nullable=False
        ),
        sa.Column(
            "seen_ids",
            postgresql.ARRAY(sa.UUID()),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("session_id", "feed_key", name="pk_feed_cursors"),
        sa.CheckConstraint("next_page >= 1", name="next_page_positive"),
    )
    op.create_index("idx_feed_cursors_updated_at", "feed_cursors", ["updated_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_feed_cursors_updated_at", table_name="feed_cursors")
    op.drop_table("feed_cursors")

    op.drop_index("idx_friendships_friend_id", table_name="friendships")
    op.drop_table("friendships")

    op.drop_index("idx_votes_votable", table_name="votes")
    op.drop_table("votes")

    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_post_id", table_name="comments")
    op.drop_table("comments")

    op.drop_index("idx_posts_group_id", table_name="posts")
    op.drop_index("idx_posts_author_id", table_name="posts")
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")

    op.execute("DROP TYPE IF EXISTS votable_type")
