"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.comment import CreateCommentUseCase, GetCommentsUseCase
from agora.application.usecase.feed import ListFeedUseCase, ResetFeedUseCase
from agora.application.usecase.friendship import UpdateFriendshipUseCase
from agora.application.usecase.post import CreatePostUseCase
from agora.application.usecase.vote import (
    CastVoteUseCase,
    GetScoreUseCase,
    GetVoteStatusUseCase,
)
from agora.config import FeedSettings
from agora.domain.service import (
    CommentService,
    FeedService,
    FriendshipService,
    PostService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Vote use cases
    @provide
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide
    def get_score_use_case(self, vote_service: VoteService) -> GetScoreUseCase:
        """Provide get score use case."""
        return GetScoreUseCase(vote_service=vote_service)

    @provide
    def get_vote_status_use_case(
        self, vote_service: VoteService
    ) -> GetVoteStatusUseCase:
        """Provide get vote status use case."""
        return GetVoteStatusUseCase(vote_service=vote_service)

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_get_comments_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        vote_service: VoteService,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service,
            post_service=post_service,
            vote_service=vote_service,
        )

    # Post use cases
    @provide
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    # Feed use cases
    @provide
    def get_list_feed_use_case(
        self, feed_service: FeedService, feed_settings: FeedSettings
    ) -> ListFeedUseCase:
        """Provide list feed use case."""
        return ListFeedUseCase(feed_service=feed_service, feed_settings=feed_settings)

    @provide
    def get_reset_feed_use_case(
        self, feed_service: FeedService, feed_settings: FeedSettings
    ) -> ResetFeedUseCase:
        """Provide reset feed use case."""
        return ResetFeedUseCase(feed_service=feed_service, feed_settings=feed_settings)

    # Friendship use cases
    @provide
    def get_update_friendship_use_case(
        self, friendship_service: FriendshipService
    ) -> UpdateFriendshipUseCase:
        """Provide update friendship use case."""
        return UpdateFriendshipUseCase(friendship_service=friendship_service)
