"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import CommentSettings, FeedSettings, VotingSettings
from agora.domain.repository import (
    CommentRepository,
    FeedCursorRepository,
    FriendshipRepository,
    PostRepository,
    VoteRepository,
)
from agora.domain.service import (
    CommentService,
    FeedService,
    FriendshipService,
    PostService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_service=post_service,
            comment_service=comment_service,
            voting_settings=voting_settings,
        )

    @provide
    def get_feed_service(
        self,
        post_repository: PostRepository,
        friendship_repository: FriendshipRepository,
        feed_cursor_repository: FeedCursorRepository,
        vote_service: VoteService,
        comment_service: CommentService,
        feed_settings: FeedSettings,
    ) -> FeedService:
        """Provide feed domain service."""
        return FeedService(
            post_repository=post_repository,
            friendship_repository=friendship_repository,
            feed_cursor_repository=feed_cursor_repository,
            vote_service=vote_service,
            comment_service=comment_service,
            feed_settings=feed_settings,
        )

    @provide
    def get_friendship_service(
        self, friendship_repository: FriendshipRepository
    ) -> FriendshipService:
        """Provide friendship domain service."""
        return FriendshipService(friendship_repository=friendship_repository)
