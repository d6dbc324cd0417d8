"""
Tests for SupabaseAuthAdapter outside disabled mode, with a mocked client.
"""
from __future__ import annotations

from unittest.mock import Mock

import pytest

from src.domain.errors import AuthError, BackendError
from src.infrastructure.database import supabase_client
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter


@pytest.fixture
def unconfigured(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "0")
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)


@pytest.fixture
def remote_client(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "0")
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
    client = Mock()
    monkeypatch.setattr(supabase_client, "create_client", Mock(return_value=client))
    return client


def test_unconfigured_adapter_never_uses_local_credentials(unconfigured):
    auth = SupabaseAuthAdapter()
    assert not auth.local
    with pytest.raises(AuthError):
        auth.sign_in("admin@example.com", "admin")


def test_unconfigured_session_lookup_raises(unconfigured):
    with pytest.raises(BackendError):
        SupabaseAuthAdapter().get_session("tok")


def test_sign_out_revokes_with_the_user_token(remote_client):
    SupabaseAuthAdapter().sign_out("user-jwt")
    remote_client.auth.admin.sign_out.assert_called_once_with("user-jwt")


def test_sign_out_failure_propagates(remote_client):
    remote_client.auth.admin.sign_out.side_effect = RuntimeError("401: invalid JWT")
    with pytest.raises(BackendError, match="invalid JWT"):
        SupabaseAuthAdapter().sign_out("user-jwt")


def test_user_client_carries_the_token(remote_client):
    client = supabase_client.get_user_client("user-jwt")

    assert client is remote_client
    remote_client.postgrest.auth.assert_called_once_with("user-jwt")
    options = supabase_client.create_client.call_args.kwargs["options"]
    assert options.headers["Authorization"] == "Bearer user-jwt"


def test_user_client_absent_in_disabled_mode(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "1")
    assert supabase_client.get_user_client("user-jwt") is None


def test_local_password_must_be_configured(monkeypatch):
    monkeypatch.setenv("SUPABASE_DISABLED", "1")
    monkeypatch.setenv("ADMIN_PASSWORD", "")
    with pytest.raises(AuthError):
        SupabaseAuthAdapter().sign_in("admin@example.com", "")
