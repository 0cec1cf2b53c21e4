"""Unit tests for VoteService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from agora.config import VotingSettings
from agora.domain.error import (
    ConflictRetryableError,
    InvalidVoteValueError,
    StorageError,
    TargetNotFoundError,
)
from agora.domain.repository import CommentRepository, PostRepository, VoteRepository
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteTarget
from agora.persistence.repository.inmemory import InMemoryVoteRepository
from tests.conftest import make_comment, make_post, make_vote
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class RacingVoteRepository(InMemoryVoteRepository):
    """Loses the insert race a fixed number of times.

    Before each lost race the competing vote, if any, lands in the store,
    as if a concurrent request from the same user committed first.
    """

    def __init__(self, lost_races: int, competing=None) -> None:
        super().__init__()
        self.lost_races = lost_races
        self.competing = competing
        self.save_calls = 0

    async def save(self, vote):
        self.save_calls += 1
        if self.lost_races > 0:
            self.lost_races -= 1
            if self.competing is not None:
                self._votes[self.competing.id] = self.competing
            raise IntegrityError("INSERT INTO votes", None, Exception("unique_vote"))
        return await super().save(vote)


class VanishingVoteRepository(InMemoryVoteRepository):
    """The first update finds its row deleted by a concurrent request."""

    async def update_value(self, vote_id, value):
        if not getattr(self, "_vanished", False):
            self._vanished = True
            await self.delete(vote_id)
            return None
        return await super().update_value(vote_id, value)


class BrokenVoteRepository(InMemoryVoteRepository):
    async def find_by_votable(self, votable_type, votable_id):
        raise OperationalError("SELECT", None, Exception("connection reset"))


async def _saved_post(unit_env):
    post_repo = await unit_env.get(PostRepository)
    return await post_repo.save(make_post())


async def _service_with(unit_env, vote_repository, conflict_retries=1) -> VoteService:
    return VoteService(
        vote_repository=vote_repository,
        post_service=await unit_env.get(PostService),
        comment_service=await unit_env.get(CommentService),
        voting_settings=VotingSettings(conflict_retries=conflict_retries),
    )


class TestApplyVote:
    """Tests for apply_vote."""

    @pytest.mark.asyncio
    async def test_upvote_creates_vote(self, unit_env):
        """First upvote stores one row and moves the score by +1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        target = VoteTarget.of(post_id=post.id)

        # Act
        outcome = await vote_service.apply_vote(user_id, target, 1)

        # Assert
        assert outcome.final_value == 1
        assert outcome.previous_value == 0
        assert outcome.score_delta == 1
        saved = await vote_repo.find_by_user_and_votable(
            user_id, VotableType.POST, post.id
        )
        assert saved is not None
        assert saved.value == 1

    @pytest.mark.asyncio
    async def test_repeated_vote_is_idempotent(self, unit_env):
        """Voting the same value twice keeps one row and the same score."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        target = VoteTarget.of(post_id=post.id)

        await vote_service.apply_vote(user_id, target, 1)
        outcome = await vote_service.apply_vote(user_id, target, 1)

        assert outcome.final_value == 1
        assert outcome.score_delta == 0
        assert len(await vote_repo.find_by_votable(VotableType.POST, post.id)) == 1
        assert await vote_service.compute_score(target) == 1

    @pytest.mark.asyncio
    async def test_opposite_vote_flips(self, unit_env):
        """Downvoting after an upvote flips the row in place."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        target = VoteTarget.of(post_id=post.id)

        await vote_service.apply_vote(user_id, target, 1)
        outcome = await vote_service.apply_vote(user_id, target, -1)

        assert outcome.final_value == -1
        assert outcome.score_delta == -2
        votes = await vote_repo.find_by_votable(VotableType.POST, post.id)
        assert [v.value for v in votes] == [-1]

    @pytest.mark.asyncio
    async def test_zero_removes_vote(self, unit_env):
        """A value of 0 deletes the user's row."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        target = VoteTarget.of(post_id=post.id)

        await vote_service.apply_vote(user_id, target, -1)
        outcome = await vote_service.apply_vote(user_id, target, 0)

        assert outcome.final_value == 0
        assert outcome.score_delta == 1
        assert await vote_repo.find_by_votable(VotableType.POST, post.id) == []

    @pytest.mark.asyncio
    async def test_zero_without_vote_is_noop(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)
        target = VoteTarget.of(post_id=post.id)

        outcome = await vote_service.apply_vote(UserId(uuid4()), target, 0)

        assert outcome.final_value == 0
        assert outcome.score_delta == 0

    @pytest.mark.asyncio
    async def test_three_users_net_score(self, unit_env):
        """+1, +1 and -1 nets 1; the first voter then withdrawing nets 0."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        target = VoteTarget.of(post_id=post.id)
        first, second, third = UserId(uuid4()), UserId(uuid4()), UserId(uuid4())

        for user_id, value in ((first, 1), (second, 1), (third, -1)):
            await vote_service.apply_vote(user_id, target, value)

        assert await vote_service.compute_score(target) == 1

        outcome = await vote_service.apply_vote(first, target, 0)

        assert outcome.final_value == 0
        assert outcome.score_delta == -1
        assert await vote_service.compute_score(target) == 0
        assert (
            await vote_repo.find_by_user_and_votable(first, VotableType.POST, post.id)
            is None
        )
        assert len(await vote_repo.find_by_votable(VotableType.POST, post.id)) == 2

    @pytest.mark.asyncio
    async def test_vote_on_comment(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await _saved_post(unit_env)
        comment = await comment_repo.save(make_comment(post.id))
        user_id = UserId(uuid4())
        target = VoteTarget.of(comment_id=comment.id)

        await vote_service.apply_vote(user_id, target, -1)

        assert await vote_service.compute_score(target) == -1
        assert await vote_service.get_user_vote(user_id, target) == -1
        # Post ledger untouched
        assert await vote_service.compute_score(VoteTarget.of(post_id=post.id)) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [2, -2, 5, True, "1", 1.0, None])
    async def test_invalid_value_rejected_before_storage(self, unit_env, value):
        """Anything but -1, 0 or +1 is refused without touching the ledger."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await _saved_post(unit_env)
        target = VoteTarget.of(post_id=post.id)

        with pytest.raises(InvalidVoteValueError):
            await vote_service.apply_vote(UserId(uuid4()), target, value)

        assert await vote_repo.find_by_votable(VotableType.POST, post.id) == []

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        target = VoteTarget.of(post_id=PostId(uuid4()))

        with pytest.raises(TargetNotFoundError, match="Post not found"):
            await vote_service.apply_vote(UserId(uuid4()), target, 1)

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        target = VoteTarget.of(comment_id=CommentId(uuid4()))

        with pytest.raises(TargetNotFoundError, match="Comment not found"):
            await vote_service.apply_vote(UserId(uuid4()), target, 1)


class TestVoteConflicts:
    """Concurrent writers racing on the (user, target) uniqueness rule."""

    @pytest.mark.asyncio
    async def test_lost_insert_race_is_retried(self, unit_env):
        """A concurrent +1 committed first; the retry flips it to -1."""
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        competing = make_vote(post.id, 1, user_id=user_id)
        repo = RacingVoteRepository(lost_races=1, competing=competing)
        vote_service = await _service_with(unit_env, repo)
        target = VoteTarget.of(post_id=post.id)

        outcome = await vote_service.apply_vote(user_id, target, -1)

        assert outcome.final_value == -1
        assert outcome.previous_value == 1
        assert await vote_service.compute_score(target) == -1
        assert len(await repo.find_by_votable(VotableType.POST, post.id)) == 1

    @pytest.mark.asyncio
    async def test_lost_race_with_same_value_settles(self, unit_env):
        """If the winner voted the same value, the retry is a no-op."""
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        competing = make_vote(post.id, 1, user_id=user_id)
        repo = RacingVoteRepository(lost_races=1, competing=competing)
        vote_service = await _service_with(unit_env, repo)

        outcome = await vote_service.apply_vote(
            user_id, VoteTarget.of(post_id=post.id), 1
        )

        assert outcome.final_value == 1
        assert outcome.score_delta == 0
        assert repo.save_calls == 1

    @pytest.mark.asyncio
    async def test_persistent_conflict_raises_retryable(self, unit_env):
        """After the configured retries the conflict is surfaced."""
        post = await _saved_post(unit_env)
        repo = RacingVoteRepository(lost_races=10)
        vote_service = await _service_with(unit_env, repo, conflict_retries=1)

        with pytest.raises(ConflictRetryableError) as exc_info:
            await vote_service.apply_vote(
                UserId(uuid4()), VoteTarget.of(post_id=post.id), 1
            )

        assert exc_info.value.attempts == 2
        assert repo.save_calls == 2

    @pytest.mark.asyncio
    async def test_no_retries_configured(self, unit_env):
        post = await _saved_post(unit_env)
        repo = RacingVoteRepository(lost_races=1)
        vote_service = await _service_with(unit_env, repo, conflict_retries=0)

        with pytest.raises(ConflictRetryableError):
            await vote_service.apply_vote(
                UserId(uuid4()), VoteTarget.of(post_id=post.id), 1
            )

        assert repo.save_calls == 1

    @pytest.mark.asyncio
    async def test_vanished_row_is_reinserted(self, unit_env):
        """A row deleted mid-update is recreated on the retry."""
        post = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        repo = VanishingVoteRepository()
        await repo.save(make_vote(post.id, 1, user_id=user_id))
        vote_service = await _service_with(unit_env, repo)
        target = VoteTarget.of(post_id=post.id)

        outcome = await vote_service.apply_vote(user_id, target, -1)

        assert outcome.final_value == -1
        assert outcome.previous_value == 0
        assert await vote_service.get_user_vote(user_id, target) == -1


class TestScores:
    """Tests for score and vote-status reads."""

    @pytest.mark.asyncio
    async def test_target_without_votes_scores_zero(self, unit_env):
        """Reading a score never checks that the target exists."""
        vote_service = await unit_env.get(VoteService)

        score = await vote_service.compute_score(VoteTarget.of(post_id=PostId(uuid4())))

        assert score == 0

    @pytest.mark.asyncio
    async def test_get_user_vote_defaults_to_zero(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post = await _saved_post(unit_env)

        value = await vote_service.get_user_vote(
            UserId(uuid4()), VoteTarget.of(post_id=post.id)
        )

        assert value == 0

    @pytest.mark.asyncio
    async def test_batch_reads_fill_missing_ids(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        voted = await _saved_post(unit_env)
        silent = await _saved_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.apply_vote(user_id, VoteTarget.of(post_id=voted.id), -1)
        await vote_service.apply_vote(
            UserId(uuid4()), VoteTarget.of(post_id=voted.id), -1
        )

        scores = await vote_service.compute_scores(
            VotableType.POST, [voted.id, silent.id]
        )
        mine = await vote_service.get_user_votes(
            user_id, VotableType.POST, [voted.id, silent.id]
        )

        assert scores == {voted.id: -2, silent.id: 0}
        assert mine == {voted.id: -1, silent.id: 0}

    @pytest.mark.asyncio
    async def test_store_failure_becomes_storage_error(self, unit_env):
        vote_service = await _service_with(unit_env, BrokenVoteRepository())

        with pytest.raises(StorageError) as exc_info:
            await vote_service.compute_score(VoteTarget.of(post_id=PostId(uuid4())))

        assert isinstance(exc_info.value.__cause__, OperationalError)
