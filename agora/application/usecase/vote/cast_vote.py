"""Cast vote use case."""

from pydantic import BaseModel

from agora.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from agora.domain.service import VoteService
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteTarget


class CastVoteRequest(BaseModel):
    """Cast vote request.

    Exactly one of post_id and comment_id must be set. A value of 0
    removes the user's vote.
    """

    user_id: str  # User ID from the authenticated caller
    value: int
    post_id: str | None = None
    comment_id: str | None = None


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    value: int  # The caller's vote after the call
    score_delta: int
    score: int  # Target score after the call


class CastVoteUseCase(BaseUseCase):
    """Use case for upvoting, downvoting or clearing a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The caller's resulting vote and the target's score

        Raises:
            InvalidInputError: On a bad target, id or value
            TargetNotFoundError: If the target does not exist
        """
        user_id = UserId(parse_uuid(request.user_id, "user_id"))
        post_id = parse_optional_uuid(request.post_id, "post_id")
        comment_id = parse_optional_uuid(request.comment_id, "comment_id")
        target = VoteTarget.of(
            post_id=PostId(post_id) if post_id else None,
            comment_id=CommentId(comment_id) if comment_id else None,
        )

        outcome = await self.vote_service.apply_vote(user_id, target, request.value)
        score = await self.vote_service.compute_score(target)

        return CastVoteResponse(
            votable_type=target.votable_type,
            votable_id=str(target.votable_id),
            value=outcome.final_value,
            score_delta=outcome.score_delta,
            score=score,
        )
