"""Popularity ranking for the popular feed."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence
from uuid import UUID

from agora.domain.model.post import Post
from agora.domain.model.vote import Vote, tally


@dataclass(frozen=True)
class RankedPost:
    """A post with the score it was ranked by."""

    post: Post
    score: int


def rank_by_popularity(
    posts: Iterable[Post],
    votes_by_post: Mapping[UUID, Sequence[Vote]],
    window_start: Optional[datetime] = None,
) -> list[RankedPost]:
    """Order posts by score within a time window.

    Posts created before ``window_start`` are excluded. The order is score
    descending, then newest first, then post id ascending, so equal input
    always yields the same sequence. Inputs are not modified.

    Args:
        posts: Candidate posts
        votes_by_post: Votes per post id; posts missing here score 0
        window_start: Inclusive lower bound on created_at, None for no bound

    Returns:
        Ranked posts with their scores
    """
    ranked = [
        RankedPost(post=post, score=tally(votes_by_post.get(post.id, ())))
        for post in posts
        if window_start is None or post.created_at >= window_start
    ]

    # Stable sorts, least significant key first
    ranked.sort(key=lambda r: r.post.id)
    ranked.sort(key=lambda r: r.post.created_at, reverse=True)
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked
