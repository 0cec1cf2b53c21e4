"""Unit tests for domain value objects."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from agora.domain.error import InvalidInputError, InvalidTargetError
from agora.domain.value import (
    CommentId,
    FeedKind,
    FeedPeriod,
    FeedSpec,
    GroupId,
    PostId,
    UserId,
    VotableType,
    VoteTarget,
)
from agora.domain.value.types import MAX_QUERY_LENGTH


class TestVoteTarget:
    def test_post_target(self):
        post_id = PostId(uuid4())

        target = VoteTarget.of(post_id=post_id)

        assert target.votable_type == VotableType.POST
        assert target.votable_id == post_id
        assert str(target) == f"post:{post_id}"

    def test_comment_target(self):
        comment_id = CommentId(uuid4())

        target = VoteTarget.of(comment_id=comment_id)

        assert target.votable_type == VotableType.COMMENT
        assert target.votable_id == comment_id

    def test_both_ids_rejected(self):
        with pytest.raises(InvalidTargetError, match="not both"):
            VoteTarget.of(post_id=PostId(uuid4()), comment_id=CommentId(uuid4()))

    def test_no_id_rejected(self):
        with pytest.raises(InvalidTargetError):
            VoteTarget.of()

    def test_invalid_target_is_invalid_input(self):
        assert issubclass(InvalidTargetError, InvalidInputError)


class TestFeedPeriod:
    NOW = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)

    def test_day(self):
        assert FeedPeriod.DAY.window_start(self.NOW) == self.NOW - timedelta(days=1)

    def test_week(self):
        assert FeedPeriod.WEEK.window_start(self.NOW) == self.NOW - timedelta(days=7)

    def test_month_clamps_to_shorter_month(self):
        """31 March steps back to 29 February in a leap year."""
        start = FeedPeriod.MONTH.window_start(self.NOW)

        assert start == datetime(2024, 2, 29, 12, 0, tzinfo=timezone.utc)

    def test_month_crosses_year(self):
        now = datetime(2025, 1, 15, 8, 30, tzinfo=timezone.utc)

        assert FeedPeriod.MONTH.window_start(now) == datetime(
            2024, 12, 15, 8, 30, tzinfo=timezone.utc
        )

    def test_all_has_no_bound(self):
        assert FeedPeriod.ALL.window_start(self.NOW) is None


class TestFeedSpec:
    def test_keys(self):
        viewer = UserId(uuid4())
        group = GroupId(uuid4())

        assert FeedSpec(kind=FeedKind.RECENT).key == "recent"
        assert (
            FeedSpec(kind=FeedKind.POPULAR, period=FeedPeriod.WEEK).key
            == "popular:week"
        )
        assert FeedSpec(kind=FeedKind.FRIENDS, viewer_id=viewer).key == (
            f"friends:{viewer}"
        )
        assert FeedSpec(kind=FeedKind.GROUP, group_id=group).key == f"group:{group}"
        assert (
            FeedSpec(kind=FeedKind.SEARCH, query="  Graphene ").key == "search:graphene"
        )

    def test_popular_periods_are_separate_feeds(self):
        day = FeedSpec(kind=FeedKind.POPULAR, period=FeedPeriod.DAY)
        month = FeedSpec(kind=FeedKind.POPULAR, period=FeedPeriod.MONTH)

        assert day.key != month.key

    def test_requirements(self):
        FeedSpec(kind=FeedKind.RECENT).validate_requirements()

        with pytest.raises(InvalidInputError):
            FeedSpec(kind=FeedKind.FRIENDS).validate_requirements()
        with pytest.raises(InvalidInputError):
            FeedSpec(kind=FeedKind.GROUP).validate_requirements()

    def test_search_requirements(self):
        FeedSpec(kind=FeedKind.SEARCH, query="graphene").validate_requirements()

        for query in (None, "", "   "):
            with pytest.raises(InvalidInputError, match="non-blank"):
                FeedSpec(kind=FeedKind.SEARCH, query=query).validate_requirements()
        with pytest.raises(InvalidInputError, match="at most"):
            FeedSpec(
                kind=FeedKind.SEARCH, query="x" * (MAX_QUERY_LENGTH + 1)
            ).validate_requirements()
