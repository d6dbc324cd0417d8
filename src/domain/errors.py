from __future__ import annotations


class ValidationError(ValueError):
    """Input rejected locally, before any backend call."""


class MalformedRecordError(ValueError):
    """A backend row does not have the shape of the entity it should map to."""


class RecordNotFoundError(LookupError):
    pass


class BackendError(RuntimeError):
    """A create/read/update/delete/upload call against the backend failed."""


class AuthError(RuntimeError):
    """Sign-in was rejected by the auth service."""
