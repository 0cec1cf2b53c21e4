"""Caller identity taken from request headers.

Authentication happens upstream; the gateway forwards the authenticated
user's id in ``X-User-Id``. Feed pagination state belongs to the client
session named in ``X-Feed-Session``; a client that sends none is issued a
fresh session, returned in the same header, and continues by sending it
back.
"""

from uuid import uuid4

from fastapi import HTTPException, status

FEED_SESSION_HEADER = "X-Feed-Session"
MAX_SESSION_LENGTH = 255


def require_user_id(user_id: str | None, action: str) -> str:
    """Return the caller's user id or reject the request.

    Raises:
        HTTPException: 401 if no user id was forwarded
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


def _clean_session(session: str | None) -> str | None:
    """Strip a session header; reject one too long to store.

    Raises:
        HTTPException: 400 if the session exceeds MAX_SESSION_LENGTH
    """
    if session is None or not session.strip():
        return None
    session = session.strip()
    if len(session) > MAX_SESSION_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"{FEED_SESSION_HEADER} must be at most "
                f"{MAX_SESSION_LENGTH} characters"
            ),
        )
    return session


def feed_session_id(session: str | None) -> str:
    """The client's feed session, or a newly issued one.

    Sessions are never shared: two clients without the header get two
    different sessions and each starts its feeds from the first page.
    """
    return _clean_session(session) or uuid4().hex


def require_feed_session(session: str | None) -> str:
    """Return the client's feed session or reject the request.

    Raises:
        HTTPException: 400 if the header is missing, blank or too long
    """
    cleaned = _clean_session(session)
    if cleaned is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{FEED_SESSION_HEADER} header required",
        )
    return cleaned
