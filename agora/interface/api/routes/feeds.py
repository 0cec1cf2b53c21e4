"""Feed routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Response

from agora.application.usecase.feed import (
    FeedRequest,
    ListFeedRequest,
    ListFeedResponse,
    ListFeedUseCase,
    ResetFeedResponse,
    ResetFeedUseCase,
)
from agora.domain.value import FeedKind, FeedPeriod
from agora.interface.api.identity import (
    FEED_SESSION_HEADER,
    feed_session_id,
    require_feed_session,
)

router = APIRouter(prefix="/feeds", tags=["feeds"], route_class=DishkaRoute)


@router.get("/{kind}", response_model=ListFeedResponse)
async def list_feed(
    kind: FeedKind,
    response: Response,
    list_feed_use_case: FromDishka[ListFeedUseCase],
    period: FeedPeriod | None = None,
    group_id: str | None = None,
    q: str | None = None,
    page: int | None = Query(default=None, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    x_user_id: str | None = Header(default=None),
    x_feed_session: str | None = Header(default=None),
) -> ListFeedResponse:
    """Get the next page of a feed.

    Without ``page`` the session continues where it left off and never
    sees a post twice. Clients without ``X-Feed-Session`` get a new
    session back in that header. The friends feed needs a forwarded user,
    the group feed needs ``group_id`` and the search feed needs ``q``.

    Args:
        kind: recent, popular, friends, group or search
        response: Outgoing response, carries the feed session header
        list_feed_use_case: List feed use case from DI
        period: Time window for the popular feed
        group_id: Group UUID for the group feed
        q: Text matched against post titles and content for the search feed
        page: Explicit 1-based page, overrides the session cursor
        page_size: Posts per page
        x_user_id: Authenticated user forwarded by the gateway (optional)
        x_feed_session: Client feed session (optional)

    Returns:
        Posts with scores and comment counts, and whether more remain
    """
    session_id = feed_session_id(x_feed_session)
    result = await list_feed_use_case.execute(
        ListFeedRequest(
            session_id=session_id,
            kind=kind,
            period=period,
            user_id=x_user_id,
            group_id=group_id,
            query=q,
            page=page,
            page_size=page_size,
        )
    )
    response.headers[FEED_SESSION_HEADER] = session_id
    return result


@router.delete("/{kind}", response_model=ResetFeedResponse)
async def reset_feed(
    kind: FeedKind,
    reset_feed_use_case: FromDishka[ResetFeedUseCase],
    period: FeedPeriod | None = None,
    group_id: str | None = None,
    q: str | None = None,
    x_user_id: str | None = Header(default=None),
    x_feed_session: str | None = Header(default=None),
) -> ResetFeedResponse:
    """Forget the session's position in a feed so it starts over."""
    return await reset_feed_use_case.execute(
        FeedRequest(
            session_id=require_feed_session(x_feed_session),
            kind=kind,
            period=period,
            user_id=x_user_id,
            group_id=group_id,
            query=q,
        )
    )
