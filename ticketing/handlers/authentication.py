"""Caller identification for the HTTP surface.

The transport in front of this service is trusted to put the acting party's
identity in the ``X-Caller-ID`` header.
"""

from rest_framework.authentication import BaseAuthentication

from ticketing.domain import Identity

CALLER_HEADER = "X-Caller-ID"


class Caller:
    """Lightweight user-like object carrying the caller identity."""

    is_authenticated = True

    def __init__(self, identity: Identity) -> None:
        self.identity = identity

    def __str__(self) -> str:
        return self.identity.value


class CallerHeaderAuthentication(BaseAuthentication):
    def authenticate(self, request):
        value = request.headers.get(CALLER_HEADER, "").strip()
        if not value:
            return None
        return (Caller(Identity(value)), None)

    def authenticate_header(self, request) -> str:
        return CALLER_HEADER
