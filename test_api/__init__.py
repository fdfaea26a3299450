"""
Test Suite for the TCC Test API

This package contains tests for the mock authentication API including:
- Unit tests for the authentication, user login and account creation services
- Endpoint tests for the HTTP API
- Contract tests against the stub server
- Configuration, model and helper tests
- Integration and live tests
- Locust load profile
"""

__version__ = "1.0.0"
