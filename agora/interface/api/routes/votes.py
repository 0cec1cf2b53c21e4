"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from agora.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetScoreRequest,
    GetScoreResponse,
    GetScoreUseCase,
    GetVoteStatusRequest,
    GetVoteStatusResponse,
    GetVoteStatusUseCase,
)
from agora.interface.api.identity import require_user_id

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    Name exactly one of post_id and comment_id. Send value 0 to clear
    an existing vote.
    """

    value: int
    post_id: str | None = None
    comment_id: str | None = None


@router.post("", response_model=CastVoteResponse)
async def cast_vote(
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    x_user_id: str | None = Header(default=None),
) -> CastVoteResponse:
    """Upvote, downvote or clear a vote on a post or comment.

    Requires authentication.

    Args:
        request: Target and vote value
        cast_vote_use_case: Cast vote use case from DI
        x_user_id: Authenticated user forwarded by the gateway

    Returns:
        The caller's vote and the target's score after the call
    """
    user_id = require_user_id(x_user_id, "vote")

    return await cast_vote_use_case.execute(
        CastVoteRequest(
            user_id=user_id,
            value=request.value,
            post_id=request.post_id,
            comment_id=request.comment_id,
        )
    )


@router.get("/score", response_model=GetScoreResponse)
async def get_score(
    get_score_use_case: FromDishka[GetScoreUseCase],
    post_id: str | None = None,
    comment_id: str | None = None,
) -> GetScoreResponse:
    """Get the net score of a post or comment."""
    return await get_score_use_case.execute(
        GetScoreRequest(post_id=post_id, comment_id=comment_id)
    )


@router.get("/status", response_model=GetVoteStatusResponse)
async def get_vote_status(
    get_vote_status_use_case: FromDishka[GetVoteStatusUseCase],
    post_id: str | None = None,
    comment_id: str | None = None,
    x_user_id: str | None = Header(default=None),
) -> GetVoteStatusResponse:
    """Get the caller's current vote on a post or comment.

    Requires authentication.
    """
    user_id = require_user_id(x_user_id, "read vote status")

    return await get_vote_status_use_case.execute(
        GetVoteStatusRequest(user_id=user_id, post_id=post_id, comment_id=comment_id)
    )
