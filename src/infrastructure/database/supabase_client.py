from __future__ import annotations

import logging
import os
import secrets
from datetime import UTC, datetime, timedelta

from supabase import Client, ClientOptions, create_client

from src.domain.entities.session import AdminSession
from src.domain.errors import AuthError, BackendError

logger = logging.getLogger(__name__)

SUPABASE_NOT_CONFIGURED = (
    "Supabase is not configured: set SUPABASE_URL and SUPABASE_ANON_KEY, or SUPABASE_DISABLED=1"
)

# sessions issued in disabled mode, keyed by access token
_MEM_SESSIONS: dict[str, AdminSession] = {}
_LOCAL_SESSION_TTL = timedelta(hours=1)


class SupabaseAuthAdapter:
    """Small wrapper over Supabase Auth for the single admin account.

    Only SUPABASE_DISABLED=1 switches to local auth: credentials are then
    checked against ADMIN_EMAIL / ADMIN_PASSWORD (no default password) and
    sessions live in process memory. Without that flag a missing
    SUPABASE_URL / SUPABASE_ANON_KEY rejects every sign-in and session.
    """

    def __init__(self) -> None:
        self.disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
        self.url = os.getenv("SUPABASE_URL")
        self.key = os.getenv("SUPABASE_ANON_KEY")
        self.admin_email = os.getenv("ADMIN_EMAIL", "admin@example.com")
        self.admin_password = os.getenv("ADMIN_PASSWORD") or None
        self._client: Client | None = None
        if not self.disabled and self.url and self.key:
            self._client = create_client(self.url, self.key)

    @property
    def local(self) -> bool:
        return self.disabled

    def _require_client(self, error: type[Exception]) -> Client:
        if self._client is None:
            logger.error(SUPABASE_NOT_CONFIGURED)
            raise error(SUPABASE_NOT_CONFIGURED)
        return self._client

    def sign_in(self, email: str, password: str) -> AdminSession:
        if self.local:
            if self.admin_password is None:
                logger.error("ADMIN_PASSWORD is not set; local sign-in is disabled")
                raise AuthError("Invalid login credentials")
            if email != self.admin_email or not secrets.compare_digest(
                password.encode(), self.admin_password.encode()
            ):
                raise AuthError("Invalid login credentials")
            token = secrets.token_urlsafe(32)
            session = AdminSession(
                access_token=token,
                user_id="local-admin",
                email=email,
                expires_at=datetime.now(UTC) + _LOCAL_SESSION_TTL,
            )
            _MEM_SESSIONS[token] = session
            return session
        client = self._require_client(AuthError)
        try:  # pragma: no cover - network
            res = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:  # pragma: no cover - network
            raise AuthError(str(exc)) from exc
        sess = res.session  # pragma: no cover - network
        if sess is None or res.user is None:  # pragma: no cover - network
            raise AuthError("Invalid login credentials")
        expires_at = (  # pragma: no cover - network
            datetime.fromtimestamp(sess.expires_at, UTC) if sess.expires_at else None
        )
        return AdminSession(  # pragma: no cover - network
            access_token=sess.access_token,
            user_id=res.user.id,
            email=res.user.email,
            expires_at=expires_at,
        )

    def sign_out(self, token: str) -> None:
        """Revoke the session behind ``token``.

        Raises:
            BackendError: If the auth service did not revoke it.
        """
        if self.local:
            _MEM_SESSIONS.pop(token, None)
            return
        client = self._require_client(BackendError)
        # GoTrue's /logout authenticates with the user's own JWT, not the service key
        try:
            client.auth.admin.sign_out(token)
        except Exception as exc:
            raise BackendError(str(exc)) from exc

    def get_session(self, token: str) -> AdminSession | None:
        """Return the session behind ``token``, or None when it is not active.

        Backend failures propagate; callers decide how to treat them.
        """
        if not token:
            return None
        if self.local:
            session = _MEM_SESSIONS.get(token)
            if session is None:
                return None
            if session.expires_at and session.expires_at <= datetime.now(UTC):
                _MEM_SESSIONS.pop(token, None)
                return None
            return session
        client = self._require_client(BackendError)
        res = client.auth.get_user(token)  # pragma: no cover - network
        user = res.user if res else None  # pragma: no cover - network
        if not user:  # pragma: no cover - network
            return None
        return AdminSession(access_token=token, user_id=user.id, email=user.email)  # pragma: no cover


# Simple reusable singleton client getter for repositories/storage
_CLIENT_SINGLETON: Client | None = None


def get_supabase_client() -> Client | None:
    global _CLIENT_SINGLETON
    disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if disabled or not url or not key:
        return None
    if _CLIENT_SINGLETON is None:
        _CLIENT_SINGLETON = create_client(url, key)
    return _CLIENT_SINGLETON


def get_user_client(access_token: str) -> Client | None:
    """
    A client whose table and storage requests carry ``access_token``.

    Row-level security then evaluates admin reads and writes as the signed-in
    user instead of the anonymous role. A new client is built per call, so one
    admin's token never leaks into another request. Returns None under the
    same conditions as ``get_supabase_client``.
    """
    disabled = os.getenv("SUPABASE_DISABLED", "0") == "1"
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if disabled or not url or not key:
        return None
    client = create_client(
        url, key, options=ClientOptions(headers={"Authorization": f"Bearer {access_token}"})
    )
    client.postgrest.auth(access_token)
    return client
