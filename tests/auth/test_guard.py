"""
Tests for the identity guard
"""

from uuid import uuid4

import pytest

from notevault.auth import ANONYMOUS, Session, authorize
from notevault.errors import AuthenticationError


class TestAuthorize:
    def test_returns_user_id_for_authenticated_session(self):
        user_id = uuid4()

        assert authorize(Session(session_id="abc", user_id=user_id)) == user_id

    def test_anonymous_session_is_rejected(self):
        with pytest.raises(AuthenticationError) as exc_info:
            authorize(ANONYMOUS)

        error = exc_info.value
        assert error.status_code == 401
        assert error.code == "NOT_AUTHENTICATED"
        assert error.meta == {"session_id": None}

    def test_session_without_user_reports_its_id(self):
        with pytest.raises(AuthenticationError) as exc_info:
            authorize(Session(session_id="logged-out"))

        assert exc_info.value.meta == {"session_id": "logged-out"}

    def test_missing_session_is_rejected(self):
        with pytest.raises(AuthenticationError):
            authorize(None)

    def test_session_is_not_modified(self):
        session = Session(session_id="abc", user_id=uuid4())

        authorize(session)
        authorize(session)

        assert session.is_authenticated
