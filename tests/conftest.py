"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from outreach.core.security import create_access_token


@pytest.fixture
def client():
    """Test client for the application."""
    from outreach.api.main import app
    return TestClient(app)


@pytest.fixture
def token_factory():
    """Build access tokens for a role and optional custom permissions."""
    def _make(role="viewer", permissions=None, sub="user-1", email="user@example.com"):
        return create_access_token(
            subject=sub,
            role=role,
            permissions=permissions,
            email=email,
        )
    return _make


@pytest.fixture
def auth_headers(token_factory):
    """Authorization headers for a role and optional custom permissions."""
    def _make(role="viewer", permissions=None, **kwargs):
        token = token_factory(role=role, permissions=permissions, **kwargs)
        return {"Authorization": f"Bearer {token}"}
    return _make
