"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
]
