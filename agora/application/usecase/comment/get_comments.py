"""Get comments use case."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase, parse_optional_uuid, parse_uuid
from agora.domain.error import NotFoundError
from agora.domain.repository import CommentOrder
from agora.domain.service import (
    CommentNode,
    CommentService,
    CommentTree,
    PostService,
    VoteService,
)
from agora.domain.value import PostId, UserId, VotableType


class CommentItem(BaseModel):
    """Comment in a thread, with its replies nested."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    created_at: datetime
    score: int
    user_vote: int  # -1, 0 or 1 for the viewer; 0 when anonymous
    replies: list[CommentItem]

    @classmethod
    def from_node(cls, node: CommentNode) -> CommentItem:
        comment = node.comment
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            created_at=comment.created_at,
            score=node.score,
            user_vote=node.user_vote,
            replies=[cls.from_node(reply) for reply in node.replies],
        )


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Viewer, for their own votes (optional)
    order: CommentOrder | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int  # Comments in the tree, replies included


class GetCommentsUseCase(BaseUseCase):
    """Use case for getting the threaded discussion of a post."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            vote_service: Vote service for scores and the viewer's votes
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID and optional viewer

        Returns:
            Nested comment threads with scores and the viewer's votes

        Raises:
            NotFoundError: If the post does not exist
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        viewer = parse_optional_uuid(request.user_id, "user_id")

        post = await self.post_service.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", request.post_id)

        comments = await self.comment_service.get_comments_for_post(
            post_id=post_id, order=request.order
        )
        comment_ids = [comment.id for comment in comments]

        # Batch queries for all scores and votes (avoid N+1)
        scores = await self.vote_service.compute_scores(
            VotableType.COMMENT, comment_ids
        )
        user_votes: dict[UUID, int] = {}
        if viewer is not None:
            user_votes = await self.vote_service.get_user_votes(
                UserId(viewer), VotableType.COMMENT, comment_ids
            )

        tree = CommentTree.build(comments, scores=scores, user_votes=user_votes)

        return GetCommentsResponse(
            post_id=request.post_id,
            comments=[CommentItem.from_node(root) for root in tree.roots],
            total=len(tree),
        )
