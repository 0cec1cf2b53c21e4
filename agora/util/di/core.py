"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from agora.config import CommentSettings, FeedSettings, Settings, VotingSettings
from agora.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_feed_settings(self, settings: Settings) -> FeedSettings:
        return settings.feeds

    @provide
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        return settings.voting

    @provide
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        return settings.comments
