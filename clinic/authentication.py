"""
Session cookie authentication for the API.

DRF's stock ``SessionAuthentication`` does not advertise a
``WWW-Authenticate`` challenge, so DRF downgrades "not logged in" to a
403. This subclass supplies one so unauthenticated calls are answered
with 401 while keeping the CSRF check for logged-in unsafe requests.
"""
from __future__ import annotations

from rest_framework import authentication


class SessionAuthentication(authentication.SessionAuthentication):
    """Cookie session auth that answers anonymous calls with 401."""

    keyword = 'Session'

    def authenticate_header(self, request) -> str:
        return self.keyword
