"""Comment tree assembly.

Turns the flat comment list of a post into a forest of reply threads.
Nodes are held in an id index next to the forest, so finding the parent
of a new reply is a dictionary lookup and inserting it touches only that
parent. Construction never recurses, so arbitrarily deep threads are fine.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Optional
from uuid import UUID

import logfire

from agora.domain.error import InvalidInputError, ParentNotFoundError
from agora.domain.model.comment import Comment
from agora.domain.value import CommentId


@dataclass
class CommentNode:
    """A comment with its score, the viewer's vote and its direct replies."""

    comment: Comment
    score: int = 0
    user_vote: int = 0
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id


class CommentTree:
    """Forest of comment threads for one post."""

    def __init__(
        self,
        roots: Optional[list[CommentNode]] = None,
        index: Optional[dict[CommentId, CommentNode]] = None,
        dropped: Optional[list[CommentId]] = None,
    ) -> None:
        self._roots: list[CommentNode] = roots if roots is not None else []
        self._index: dict[CommentId, CommentNode] = index if index is not None else {}
        self._dropped: list[CommentId] = dropped if dropped is not None else []

    @classmethod
    def build(
        cls,
        comments: Iterable[Comment],
        scores: Optional[Mapping[UUID, int]] = None,
        user_votes: Optional[Mapping[UUID, int]] = None,
    ) -> "CommentTree":
        """Assemble a forest from a flat list of comments.

        Siblings keep their relative order from ``comments``. A comment
        whose parent is not in the list (or sits on another post) is left
        out together with everything below it; so are comments caught in
        a parent cycle. Nothing is raised for them.

        Args:
            comments: Comments of one post, in display order
            scores: Score per comment id (missing ids score 0)
            user_votes: Viewer's vote per comment id (missing ids are 0)

        Returns:
            The assembled tree
        """
        scores = scores or {}
        user_votes = user_votes or {}

        nodes: dict[CommentId, CommentNode] = {}
        for comment in comments:
            if comment.id in nodes:
                continue
            nodes[comment.id] = CommentNode(
                comment=comment,
                score=scores.get(comment.id, 0),
                user_vote=user_votes.get(comment.id, 0),
            )

        roots: list[CommentNode] = []
        for node in nodes.values():
            parent_id = node.comment.parent_id
            if parent_id is None:
                roots.append(node)
                continue
            parent = nodes.get(parent_id)
            if parent is None or parent.comment.post_id != node.comment.post_id:
                continue
            parent.replies.append(node)

        # Only what hangs off a root is part of the tree
        index: dict[CommentId, CommentNode] = {}
        for node in _walk(roots):
            index[node.id] = node

        dropped = [cid for cid in nodes if cid not in index]
        if dropped:
            logfire.debug(
                "Dropped comments without a reachable parent",
                count=len(dropped),
                comment_ids=[str(cid) for cid in dropped],
            )

        return cls(roots=roots, index=index, dropped=dropped)

    @property
    def roots(self) -> list[CommentNode]:
        """Top-level threads."""
        return self._roots

    @property
    def dropped(self) -> list[CommentId]:
        """Ids left out at build time."""
        return list(self._dropped)

    def find(self, comment_id: CommentId) -> Optional[CommentNode]:
        return self._index.get(comment_id)

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[CommentNode]:
        """Depth-first, pre-order traversal of every thread."""
        return _walk(self._roots)

    def insert_reply(self, parent_id: CommentId, node: CommentNode) -> "CommentTree":
        """Attach a new reply under an existing comment.

        Only the parent's reply list changes; no other node is copied.

        Args:
            parent_id: Comment the reply answers
            node: The reply, possibly carrying replies of its own

        Returns:
            This tree

        Raises:
            ParentNotFoundError: If parent_id is not in the tree
            InvalidInputError: If the node's comment names another parent
                or its id is already in the tree
        """
        parent = self._index.get(parent_id)
        if parent is None:
            raise ParentNotFoundError(str(parent_id))
        if node.comment.parent_id != parent_id:
            raise InvalidInputError(
                f"Comment {node.id} replies to {node.comment.parent_id}, not {parent_id}"
            )
        self._check_new(node)

        parent.replies.append(node)
        self._register(node)
        return self

    def add_root(self, node: CommentNode) -> "CommentTree":
        """Place a new top-level comment first in the forest.

        Raises:
            InvalidInputError: If the comment has a parent or is already
                in the tree
        """
        if node.comment.parent_id is not None:
            raise InvalidInputError(f"Comment {node.id} is a reply, not a root")
        self._check_new(node)

        self._roots.insert(0, node)
        self._register(node)
        return self

    def _check_new(self, node: CommentNode) -> None:
        for item in _walk([node]):
            if item.id in self._index:
                raise InvalidInputError(f"Comment {item.id} is already in the tree")

    def _register(self, node: CommentNode) -> None:
        for item in _walk([node]):
            self._index[item.id] = item


def _walk(roots: list[CommentNode]) -> Iterator[CommentNode]:
    """Iterative pre-order traversal."""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.replies))
