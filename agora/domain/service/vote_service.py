"""Vote domain service: the ledger behind every score."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from agora.config import VotingSettings
from agora.domain.error import (
    ConflictRetryableError,
    InvalidVoteValueError,
    TargetNotFoundError,
)
from agora.domain.model.common import utc_now
from agora.domain.model.vote import VOTE_VALUES, Vote, tally
from agora.domain.repository import VoteRepository
from agora.domain.value import (
    CommentId,
    PostId,
    UserId,
    VotableType,
    VoteId,
    VoteTarget,
)

from .base import Service, storage_errors
from .comment_service import CommentService
from .post_service import PostService


@dataclass(frozen=True)
class VoteOutcome:
    """Result of applying a vote.

    Attributes:
        final_value: The user's vote on the target after the call
        previous_value: The user's vote before the call (0 if none)
        score_delta: Change of the target's score caused by the call
    """

    final_value: int
    previous_value: int

    @property
    def score_delta(self) -> int:
        return self.final_value - self.previous_value


def validate_vote_value(value: object) -> int:
    """Return ``value`` if it is -1, 0 or +1.

    Raises:
        InvalidVoteValueError: For anything else, booleans included
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidVoteValueError(value)
    if value not in VOTE_VALUES:
        raise InvalidVoteValueError(value)
    return value


class VoteService(Service):
    """Domain service for vote operations.

    Repeating a vote is idempotent; sending 0 removes the vote; sending the
    opposite value flips it. Scores are always recomputed from the ledger.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            comment_service: Comment domain service
            voting_settings: Retry budget for uniqueness conflicts
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service
        self.voting_settings = voting_settings

    async def apply_vote(
        self, user_id: UserId, target: VoteTarget, requested_value: int
    ) -> VoteOutcome:
        """Record a user's vote on a post or comment.

        Args:
            user_id: Voting user
            target: Post or comment being voted on
            requested_value: -1, +1, or 0 to remove an existing vote

        Returns:
            The user's final vote and the resulting score change

        Raises:
            InvalidVoteValueError: If requested_value is not -1, 0 or 1
            TargetNotFoundError: If the post or comment does not exist
            ConflictRetryableError: If concurrent writes kept colliding
            StorageError: On any other persistence failure
        """
        value = validate_vote_value(requested_value)

        with logfire.span(
            "vote_service.apply_vote",
            user_id=str(user_id),
            target=str(target),
            requested_value=value,
        ):
            attempts = self.voting_settings.conflict_retries + 1
            with storage_errors("apply_vote"):
                await self._ensure_target_exists(target)

                for attempt in range(1, attempts + 1):
                    try:
                        outcome = await self._apply_once(user_id, target, value)
                    except IntegrityError:
                        logfire.warn(
                            "Concurrent vote conflict",
                            user_id=str(user_id),
                            target=str(target),
                            attempt=attempt,
                        )
                        continue

                    if outcome is None:
                        logfire.warn(
                            "Vote changed concurrently",
                            user_id=str(user_id),
                            target=str(target),
                            attempt=attempt,
                        )
                        continue

                    logfire.info(
                        "Vote applied",
                        user_id=str(user_id),
                        target=str(target),
                        final_value=outcome.final_value,
                        score_delta=outcome.score_delta,
                    )
                    return outcome

            logfire.error(
                "Vote conflict persisted after retries",
                user_id=str(user_id),
                target=str(target),
                attempts=attempts,
            )
            raise ConflictRetryableError("apply_vote", attempts)

    async def _apply_once(
        self, user_id: UserId, target: VoteTarget, value: int
    ) -> Optional[VoteOutcome]:
        """One read-modify-write pass.

        Returns None when the row read at the start vanished before it
        could be updated.
        """
        existing = await self.vote_repository.find_by_user_and_votable(
            user_id, target.votable_type, target.votable_id
        )
        previous = existing.value if existing else 0

        if value == previous:
            return VoteOutcome(final_value=value, previous_value=previous)

        if existing is None:
            now = utc_now()
            await self.vote_repository.save(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    votable_type=target.votable_type,
                    votable_id=target.votable_id,
                    value=value,
                    created_at=now,
                    updated_at=now,
                )
            )
        elif value == 0:
            # Already gone is the same end state
            await self.vote_repository.delete(existing.id)
        else:
            updated = await self.vote_repository.update_value(existing.id, value)
            if updated is None:
                return None

        return VoteOutcome(final_value=value, previous_value=previous)

    async def _ensure_target_exists(self, target: VoteTarget) -> None:
        if target.votable_type == VotableType.POST:
            found = await self.post_service.get_post_by_id(PostId(target.votable_id))
        else:
            found = await self.comment_service.get_comment_by_id(
                CommentId(target.votable_id)
            )
        if found is None:
            logfire.warn("Vote on non-existent target", target=str(target))
            raise TargetNotFoundError(
                target.votable_type.value.capitalize(), str(target.votable_id)
            )

    async def compute_score(self, target: VoteTarget) -> int:
        """Sum of all vote values on a target; 0 when it has no votes."""
        with logfire.span("vote_service.compute_score", target=str(target)):
            with storage_errors("compute_score"):
                votes = await self.vote_repository.find_by_votable(
                    target.votable_type, target.votable_id
                )
            return tally(votes)

    async def get_user_vote(self, user_id: UserId, target: VoteTarget) -> int:
        """The user's current vote on a target: -1, 0 or +1."""
        with logfire.span(
            "vote_service.get_user_vote", user_id=str(user_id), target=str(target)
        ):
            with storage_errors("get_user_vote"):
                vote = await self.vote_repository.find_by_user_and_votable(
                    user_id, target.votable_type, target.votable_id
                )
            return vote.value if vote else 0

    async def votes_by_target(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, list[Vote]]:
        """Group the votes on many items by item id (single batch query)."""
        if not votable_ids:
            return {}

        with storage_errors("votes_by_target"):
            votes = await self.vote_repository.find_by_votables(
                votable_type, votable_ids
            )

        grouped: dict[UUID, list[Vote]] = defaultdict(list)
        for vote in votes:
            grouped[vote.votable_id].append(vote)
        return grouped

    async def compute_scores(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, int]:
        """Scores of many items; items without votes score 0."""
        grouped = await self.votes_by_target(votable_type, votable_ids)
        return {vid: tally(grouped.get(vid, ())) for vid in votable_ids}

    async def get_user_votes(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> dict[UUID, int]:
        """A user's votes on many items; items not voted on map to 0."""
        if not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        with storage_errors("get_user_votes"):
            votes = await self.vote_repository.find_by_user_and_votables(
                user_id=user_id,
                votable_type=votable_type,
                votable_ids=votable_ids,
            )

        by_id = {vote.votable_id: vote.value for vote in votes}
        return {vid: by_id.get(vid, 0) for vid in votable_ids}
