"""
Pytest fixtures for the test suite.

Requests are plain dicts shaped like ``{"query": {...}, "headers": {...}}``;
tokens are minted with PyJWT so the extracted values look like real JWTs.
"""
from __future__ import annotations

import jwt
import pytest


TEST_SECRET = "test-secret"


@pytest.fixture
def jwt_secret() -> str:
    return TEST_SECRET


@pytest.fixture
def jwt_token() -> str:
    """A deterministic HS256 JWT."""
    return jwt.encode({"sub": "42", "scope": "read"}, TEST_SECRET, algorithm="HS256")


@pytest.fixture
def make_request():
    """Build a request mapping, leaving out parts that are not given."""

    def _make(query=None, headers=None, cookie=None):
        request = {}
        if query is not None:
            request["query"] = query
        if headers is not None or cookie is not None:
            request["headers"] = dict(headers or {})
            if cookie is not None:
                request["headers"]["cookie"] = cookie
        return request

    return _make
