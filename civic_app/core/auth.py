"""Authentication collaborator used by the request handlers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .models import UserIdentity


class Authenticator(Protocol):
    def authenticate(self, request: Any) -> UserIdentity | None: ...


def _headers(request: Any) -> Mapping[str, Any]:
    if isinstance(request, Mapping):
        headers = request.get("headers") or {}
    else:
        headers = getattr(request, "headers", None) or {}
    return {str(k).lower(): v for k, v in dict(headers).items()}


def extract_token(request: Any) -> str | None:
    """Pull a bearer token from the Authorization header, or a bare ``token`` entry."""
    if request is None:
        return None
    auth = _headers(request).get("authorization")
    if isinstance(auth, str):
        scheme, _, value = auth.strip().partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    token = request.get("token") if isinstance(request, Mapping) else getattr(request, "token", None)
    if isinstance(token, str) and token.strip():
        return token.strip()
    return None


class TokenAuthenticator:
    def __init__(self, tokens: Mapping[str, UserIdentity]):
        self._tokens = dict(tokens)

    @classmethod
    def from_config(cls, section: Mapping[str, Any] | None) -> TokenAuthenticator:
        """Build from a ``{token: user_id}`` or ``{token: {user_id, name, role}}`` mapping.

        This is the shape of the ``[auth.tokens]`` table in Streamlit secrets.
        """
        tokens: dict[str, UserIdentity] = {}
        for token, value in (section or {}).items():
            if isinstance(value, Mapping):
                user_id = value.get("user_id") or value.get("name") or str(token)
                tokens[str(token)] = UserIdentity(
                    user_id=str(user_id),
                    name=value.get("name"),
                    role=value.get("role", "staff"),
                )
            else:
                tokens[str(token)] = UserIdentity(user_id=str(value))
        return cls(tokens)

    def authenticate(self, request: Any) -> UserIdentity | None:
        token = extract_token(request)
        if token is None:
            return None
        return self._tokens.get(token)
