"""
Tests for the admin session guard.
"""
from __future__ import annotations

import asyncio
from unittest.mock import Mock

from src.application.services.session_guard import LOGIN_ROUTE, AdminSessionState, SessionGuard
from src.domain.entities.session import AdminSession


def resolve(auth, token):
    return asyncio.run(SessionGuard(auth).resolve(token))


def test_pending_state_exposes_nothing():
    state = AdminSessionState.pending()
    assert state.loading is True
    assert state.session is None
    assert not state.authenticated


def test_active_session():
    session = AdminSession(access_token="tok", user_id="u1", email="admin@example.com")
    auth = Mock()
    auth.get_session.return_value = session

    state = resolve(auth, "tok")

    assert state.loading is False
    assert state.session == session
    assert state.redirect_to is None
    assert state.authenticated
    auth.get_session.assert_called_once_with("tok")


def test_no_session_redirects_to_login():
    auth = Mock()
    auth.get_session.return_value = None

    state = resolve(auth, "expired")

    assert state.loading is False
    assert state.session is None
    assert state.redirect_to == LOGIN_ROUTE
    auth.get_session.assert_called_once()


def test_lookup_failure_fails_closed():
    auth = Mock()
    auth.get_session.side_effect = ConnectionError("network down")

    state = resolve(auth, "tok")

    assert state.session is None
    assert state.redirect_to == LOGIN_ROUTE
    assert not state.authenticated
    # no retry
    assert auth.get_session.call_count == 1


def test_missing_token_skips_lookup():
    auth = Mock()
    state = resolve(auth, None)
    assert state.redirect_to == LOGIN_ROUTE
    auth.get_session.assert_not_called()
