"""Get vote status use case."""

from pydantic import BaseModel

from agora.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from agora.domain.service import VoteService
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteTarget


class GetVoteStatusRequest(BaseModel):
    """Get vote status request. Exactly one target id must be set."""

    user_id: str
    post_id: str | None = None
    comment_id: str | None = None


class GetVoteStatusResponse(BaseModel):
    """Get vote status response."""

    votable_type: VotableType
    votable_id: str
    value: int  # -1, 0 or 1


class GetVoteStatusUseCase(BaseUseCase):
    """Use case for reading a user's current vote on an item."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteStatusRequest) -> GetVoteStatusResponse:
        user_id = UserId(parse_uuid(request.user_id, "user_id"))
        post_id = parse_optional_uuid(request.post_id, "post_id")
        comment_id = parse_optional_uuid(request.comment_id, "comment_id")
        target = VoteTarget.of(
            post_id=PostId(post_id) if post_id else None,
            comment_id=CommentId(comment_id) if comment_id else None,
        )

        value = await self.vote_service.get_user_vote(user_id, target)

        return GetVoteStatusResponse(
            votable_type=target.votable_type,
            votable_id=str(target.votable_id),
            value=value,
        )
