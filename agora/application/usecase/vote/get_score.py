"""Get score use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_optional_uuid
from agora.domain.service import VoteService
from agora.domain.value import CommentId, PostId, VotableType, VoteTarget


class GetScoreRequest(BaseModel):
    """Get score request. Exactly one id must be set."""

    post_id: str | None = None
    comment_id: str | None = None


class GetScoreResponse(BaseModel):
    """Get score response."""

    votable_type: VotableType
    votable_id: str
    score: int


class GetScoreUseCase(BaseUseCase):
    """Use case for reading the score of a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetScoreRequest) -> GetScoreResponse:
        post_id = parse_optional_uuid(request.post_id, "post_id")
        comment_id = parse_optional_uuid(request.comment_id, "comment_id")
        target = VoteTarget.of(
            post_id=PostId(post_id) if post_id else None,
            comment_id=CommentId(comment_id) if comment_id else None,
        )

        score = await self.vote_service.compute_score(target)

        return GetScoreResponse(
            votable_type=target.votable_type,
            votable_id=str(target.votable_id),
            score=score,
        )
