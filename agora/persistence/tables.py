"""SQLAlchemy table definitions for Agora.

Used with SQLAlchemy Core from the repositories. They match the schema
defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=True),
    Column("author_id", UUID, nullable=False),  # Owned by the identity service
    Column("group_id", UUID, nullable=True),  # Owned by the community service
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc(), posts_table.c.id)
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_group_id", posts_table.c.group_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("author_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id, comments_table.c.created_at)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "votable_type",
        Enum("post", "comment", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
    CheckConstraint("value IN (-1, 1)", name="vote_value_signed_unit"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# FRIENDSHIPS TABLE
# ============================================================================
friendships_table = Table(
    "friendships",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column("friend_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "friend_id", name="unique_friendship"),
    CheckConstraint("user_id <> friend_id", name="friendship_not_self"),
)

Index("idx_friendships_friend_id", friendships_table.c.friend_id)

# ============================================================================
# FEED CURSORS TABLE (per-session pagination state)
# ============================================================================
feed_cursors_table = Table(
    "feed_cursors",
    metadata,
    Column("session_id", String(255), nullable=False),
    Column("feed_key", String(255), nullable=False),
    Column("next_page", Integer, nullable=False, server_default="1"),
    Column("seen_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("session_id", "feed_key", name="pk_feed_cursors"),
    CheckConstraint("next_page >= 1", name="next_page_positive"),
)

Index("idx_feed_cursors_updated_at", feed_cursors_table.c.updated_at)
