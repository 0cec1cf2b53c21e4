"""Unit tests for domain error to HTTP status mapping."""

import pytest
from fastapi import HTTPException

from agora.domain.error import (
    ConflictError,
    ConflictRetryableError,
    DomainError,
    InvalidTargetError,
    InvalidVoteValueError,
    NotFoundError,
    ParentNotFoundError,
    StorageError,
    TargetNotFoundError,
)
from agora.interface.api.errors import status_for
from agora.interface.api.identity import (
    MAX_SESSION_LENGTH,
    feed_session_id,
    require_feed_session,
)


@pytest.mark.parametrize(
    "error, expected",
    [
        (InvalidTargetError("both"), 400),
        (InvalidVoteValueError(2), 400),
        (NotFoundError("Post", "x"), 404),
        (TargetNotFoundError("Comment", "x"), 404),
        (ParentNotFoundError("x"), 404),
        (ConflictError("already friends"), 409),
        (ConflictRetryableError("apply_vote", 2), 409),
        (StorageError("next_page"), 503),
        (DomainError("unexpected"), 500),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


class TestFeedSession:
    def test_client_session_is_kept(self):
        assert feed_session_id(" tab-1 ") == "tab-1"

    def test_missing_session_gets_a_fresh_one_per_client(self):
        first = feed_session_id(None)
        second = feed_session_id("   ")

        assert first
        assert second
        assert first != second

    def test_overlong_session_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            feed_session_id("x" * (MAX_SESSION_LENGTH + 1))

        assert exc_info.value.status_code == 400

    def test_reset_requires_a_session(self):
        assert require_feed_session("tab-1") == "tab-1"

        with pytest.raises(HTTPException) as exc_info:
            require_feed_session(None)

        assert exc_info.value.status_code == 400
