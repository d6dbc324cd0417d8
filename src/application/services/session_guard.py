from __future__ import annotations

import logging
from dataclasses import dataclass

from starlette.concurrency import run_in_threadpool

from src.domain.entities.session import AdminSession
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/admin/login"


@dataclass(frozen=True)
class AdminSessionState:
    """Outcome of a session check for an admin page.

    While the lookup is outstanding ``loading`` is True and ``session`` is None;
    callers must not produce protected content in that state nor once
    ``redirect_to`` is set.
    """

    session: AdminSession | None
    loading: bool
    redirect_to: str | None = None

    @classmethod
    def pending(cls) -> AdminSessionState:
        return cls(session=None, loading=True)

    @property
    def authenticated(self) -> bool:
        return not self.loading and self.session is not None


class SessionGuard:
    """Resolves the admin session behind a request token, failing closed.

    The auth service is asked exactly once per ``resolve``. There is no retry
    and no re-validation while the returned state is in use.
    """

    def __init__(self, auth: SupabaseAuthAdapter, login_route: str = LOGIN_ROUTE) -> None:
        self.auth = auth
        self.login_route = login_route

    def _denied(self) -> AdminSessionState:
        return AdminSessionState(session=None, loading=False, redirect_to=self.login_route)

    async def resolve(self, token: str | None) -> AdminSessionState:
        if not token:
            return self._denied()
        try:
            session = await run_in_threadpool(self.auth.get_session, token)
        except Exception as exc:
            # a failed lookup is indistinguishable from "no session" for access purposes
            logger.warning("Session lookup failed, treating as signed out: %s", exc)
            return self._denied()
        if session is None:
            return self._denied()
        return AdminSessionState(session=session, loading=False)
