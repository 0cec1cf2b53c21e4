"""Unit tests for the in-memory repositories used by the unit suite.

They stand in for PostgreSQL, so they must honour the same ordering and
uniqueness rules.
"""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from agora.domain.model.common import utc_now
from agora.domain.model.friendship import Friendship
from agora.domain.repository import PostFilter, PostSort
from agora.domain.value import FriendshipId, GroupId, PostId, UserId, VotableType
from agora.persistence.repository.inmemory import (
    InMemoryFriendshipRepository,
    InMemoryPostRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_post, make_vote


class TestInMemoryPostRepository:
    @pytest.mark.asyncio
    async def test_find_posts_newest_first_with_id_tiebreak(self):
        repo = InMemoryPostRepository()
        now = utc_now()
        tied_b = await repo.save(make_post(post_id=PostId(UUID(int=2)), created_at=now))
        tied_a = await repo.save(make_post(post_id=PostId(UUID(int=1)), created_at=now))
        older = await repo.save(make_post(created_at=now - timedelta(hours=1)))

        posts, total = await repo.find_posts(PostFilter())

        assert total == 3
        assert [p.id for p in posts] == [tied_a.id, tied_b.id, older.id]

    @pytest.mark.asyncio
    async def test_find_posts_pages_and_counts(self):
        repo = InMemoryPostRepository()
        for n in range(5):
            await repo.save(make_post(age=timedelta(minutes=n)))

        page, total = await repo.find_posts(PostFilter(), offset=4, limit=2)

        assert total == 5
        assert len(page) == 1

    @pytest.mark.asyncio
    async def test_filters_combine(self):
        repo = InMemoryPostRepository()
        author, group = UserId(uuid4()), GroupId(uuid4())
        match = await repo.save(make_post(author_id=author, group_id=group))
        await repo.save(make_post(author_id=author))
        await repo.save(make_post(group_id=group))
        await repo.save(make_post(author_id=author, group_id=group, age=timedelta(days=3)))

        posts = await repo.find_all(
            PostFilter(
                author_ids=frozenset({author}),
                group_id=group,
                created_after=utc_now() - timedelta(days=1),
            )
        )

        assert [p.id for p in posts] == [match.id]


    @pytest.mark.asyncio
    async def test_oldest_first(self):
        repo = InMemoryPostRepository()
        newer = await repo.save(make_post(age=timedelta(minutes=1)))
        older = await repo.save(make_post(age=timedelta(minutes=5)))

        posts, _ = await repo.find_posts(PostFilter(), PostSort.OLDEST)

        assert [p.id for p in posts] == [older.id, newer.id]

    @pytest.mark.asyncio
    async def test_query_matches_title_or_content(self):
        repo = InMemoryPostRepository()
        by_title = await repo.save(make_post(title="Dark Matter survey"))
        by_content = await repo.save(
            make_post(content="what is dark matter made of", age=timedelta(hours=1))
        )
        await repo.save(make_post(title="Dark energy"))

        posts, total = await repo.find_posts(PostFilter(query="dark matter"))

        assert total == 2
        assert [p.id for p in posts] == [by_title.id, by_content.id]


class TestInMemoryVoteRepository:
    @pytest.mark.asyncio
    async def test_duplicate_vote_raises_integrity_error(self):
        repo = InMemoryVoteRepository()
        user_id, post_id = UserId(uuid4()), PostId(uuid4())
        await repo.save(make_vote(post_id, 1, user_id=user_id))

        with pytest.raises(IntegrityError):
            await repo.save(make_vote(post_id, -1, user_id=user_id))

    @pytest.mark.asyncio
    async def test_same_id_on_other_type_is_distinct(self):
        repo = InMemoryVoteRepository()
        user_id, item_id = UserId(uuid4()), uuid4()

        await repo.save(make_vote(item_id, 1, VotableType.POST, user_id=user_id))
        await repo.save(make_vote(item_id, 1, VotableType.COMMENT, user_id=user_id))

        assert len(await repo.find_by_votable(VotableType.POST, item_id)) == 1
        assert len(await repo.find_by_votable(VotableType.COMMENT, item_id)) == 1

    @pytest.mark.asyncio
    async def test_update_and_delete_missing_row(self):
        repo = InMemoryVoteRepository()
        vote = make_vote(uuid4(), 1)

        assert await repo.update_value(vote.id, -1) is None
        assert await repo.delete(vote.id) is False


class TestInMemoryFriendshipRepository:
    @pytest.mark.asyncio
    async def test_friendship_is_mutual(self):
        repo = InMemoryFriendshipRepository()
        a, b, c = UserId(uuid4()), UserId(uuid4()), UserId(uuid4())
        await repo.save(Friendship(id=FriendshipId(uuid4()), user_id=a, friend_id=b))

        assert await repo.find_friend_ids(a) == {b}
        assert await repo.find_friend_ids(b) == {a}
        assert await repo.are_friends(b, a)
        assert not await repo.are_friends(a, c)

    @pytest.mark.asyncio
    async def test_delete_link_in_either_direction(self):
        repo = InMemoryFriendshipRepository()
        a, b, c = UserId(uuid4()), UserId(uuid4()), UserId(uuid4())
        await repo.save(Friendship(id=FriendshipId(uuid4()), user_id=a, friend_id=b))
        await repo.save(Friendship(id=FriendshipId(uuid4()), user_id=a, friend_id=c))

        assert await repo.delete_link(b, a) is True
        assert await repo.delete_link(a, b) is False
        assert await repo.find_friend_ids(a) == {c}
