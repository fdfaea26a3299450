"""
Pytest Configuration and Fixtures for the TCC Test API

This module contains shared fixtures, mocks, and configuration for testing
the mock authentication and account creation services and their HTTP API.
"""

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
import os
import sys
import tempfile

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables before importing the services
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "tcc_api_test_logs"))

from tcc_api.service.authentication_service import AuthenticationService
from tcc_api.service.user_login_service import UserLoginService
from tcc_api.service.account_creation_service import AccountCreationService
from tcc_api.helper.auth_helper import auth_token
from tcc_api.src.api_app import create_app
from tcc_api.src.stub_server import StubServer, create_stub_app


VALID_USERNAME = "TCCTest"
VALID_PASSWORD = "Test!456"


@pytest.fixture
def authentication_service():
    """Admin authentication service without simulated latency."""
    return AuthenticationService(delay=0)


@pytest.fixture
def user_login_service():
    """User login service without simulated latency."""
    return UserLoginService(delay=0)


@pytest.fixture
def account_creation_service():
    """Account creation service without simulated latency."""
    return AccountCreationService(delay=0, lookup_delay=0)


@pytest.fixture
def test_app(authentication_service, user_login_service, account_creation_service):
    """Create a fresh mock API application for each test."""
    return create_app(
        authentication_service=authentication_service,
        user_login_service=user_login_service,
        account_creation_service=account_creation_service,
    )


@pytest.fixture
def test_client(test_app):
    """Create test client for synchronous tests."""
    return TestClient(test_app)


@pytest.fixture
async def async_test_client(test_app):
    """Create async test client for asynchronous tests."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def stub_server():
    """Stub server loaded with the default canned responses."""
    return StubServer()


@pytest.fixture
def stub_client(stub_server):
    """Test client bound to the stub server."""
    return TestClient(create_stub_app(stub_server))


@pytest.fixture
def sample_auth_data():
    """Valid admin credentials."""
    return {"username": VALID_USERNAME, "password": VALID_PASSWORD}


@pytest.fixture
def sample_account_data():
    """Account that does not exist yet."""
    return {"username": "mixtest", "password": "11223344"}


@pytest.fixture
def valid_access_token():
    """Generate a valid mock token for the admin user."""
    return auth_token.generate_token(VALID_USERNAME)


@pytest.fixture
def auth_headers(valid_access_token):
    return {"Authorization": f"Bearer {valid_access_token}"}


@pytest.fixture
def expired_token():
    """A mock token whose claims expired long ago."""
    return (
        "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
        "eyJ1bmlxdWVfbmFtZSI6IlRDQ1Rlc3QiLCJuYW1laWQiOiJUQ0NUZXN0Iiwic3ViIjoiVENDVGVzdCIsImp0aSI6IjM4OGZiODRkLWQzY2QtNGYxOS04MzBjLWU5MzEyY2NlMjliNSIsImlhdCI6MTUwMDAwMDAwMCwibmJmIjoxNTAwMDAwMDAwLCJleHAiOjE1MDAwMDM2MDAsImlzcyI6IlRDQ0p3dEFwaSIsImF1ZCI6IlRDQ0p3dEFwaVVzZXJzIn0."
        "invalid_signature"
    )


@pytest.fixture
def config_env(monkeypatch, tmp_path):
    """Environment with no settings file and no TestSettings overrides."""
    for key in list(os.environ):
        if key.lower().startswith("testsettings"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("TCC_SETTINGS_FILE", str(tmp_path / "missing.json"))
    return monkeypatch


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "live: mark test as requiring a running API server")
