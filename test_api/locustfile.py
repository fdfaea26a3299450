"""
Locust Load Testing for the TCC Test API

This module provides Locust-based load testing for the token and account
creation endpoints.

Usage:
    locust -f test_api/locustfile.py --host=http://localhost:5214

    Or run headless:
    locust -f test_api/locustfile.py --host=http://localhost:5214 --headless -u 100 -r 10 -t 5m
"""

from locust import HttpUser, task, between, events
from locust.runners import MasterRunner
import random
import string
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ADMIN_USERNAME = "TCCTest"
ADMIN_PASSWORD = "Test!456"


def generate_random_username():
    """Generate a random username that passes account validation."""
    return "locust_" + ''.join(random.choices(string.ascii_lowercase + string.digits, k=10))


def generate_random_password():
    """Generate a random password."""
    return ''.join(random.choices(string.ascii_letters + string.digits, k=10))


class AccountCreatorUser(HttpUser):
    """
    Simulates an admin logging in and creating accounts.
    """

    wait_time = between(1, 5)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.token = None

    def on_start(self):
        """Called when a new user starts."""
        self.login()

    def login(self):
        with self.client.post(
            "/api/auth/token",
            json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
            name="Get Token",
            catch_response=True
        ) as response:
            if response.status_code == 200:
                self.token = response.json().get("token")
                response.success()
            else:
                response.failure(f"Login failed: {response.status_code}")

    @task(10)
    def health_check(self):
        """
        Most common task: Check if the API is healthy.
        """
        with self.client.get("/", name="Health Check", catch_response=True) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Health check failed: {response.status_code}")

    @task(5)
    def get_token(self):
        self.login()

    @task(2)
    def invalid_login(self):
        """
        Login with random credentials, 401 is the expected answer.
        """
        with self.client.post(
            "/api/auth/token",
            json={"username": generate_random_username(), "password": generate_random_password()},
            name="Invalid Login",
            catch_response=True
        ) as response:
            if response.status_code == 401:
                response.success()
            else:
                response.failure(f"Expected 401, got {response.status_code}")

    @task(3)
    def create_account(self):
        """
        Create a new account with the stored token.
        """
        if not self.token:
            self.login()
            return

        with self.client.post(
            "/api/account/create",
            json={"username": generate_random_username(), "password": generate_random_password()},
            headers={"Authorization": f"Bearer {self.token}"},
            name="Create Account",
            catch_response=True
        ) as response:
            if response.status_code in [200, 409]:
                response.success()
            elif response.status_code == 401:
                # token expired
                self.token = None
                response.failure("Token rejected")
            else:
                response.failure(f"Create account failed: {response.status_code}")

    @task(1)
    def create_existing_account(self):
        if not self.token:
            return

        with self.client.post(
            "/api/account/create",
            json={"username": ADMIN_USERNAME, "password": generate_random_password()},
            headers={"Authorization": f"Bearer {self.token}"},
            name="Create Existing Account",
            catch_response=True
        ) as response:
            if response.status_code == 409:
                response.success()
            else:
                response.failure(f"Expected 409, got {response.status_code}")


class RapidHealthCheckUser(HttpUser):
    """
    User that rapidly checks health endpoint.
    Useful for baseline performance testing.
    """

    wait_time = between(0.1, 0.5)

    @task
    def rapid_health_check(self):
        """Rapidly check health endpoint."""
        self.client.get("/", name="Rapid Health Check")


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """Called when the test starts."""
    logger.info("LOAD TEST STARTED")
    if isinstance(environment.runner, MasterRunner):
        logger.info(f"Running as master with {environment.runner.worker_count} workers")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Called when the test stops."""
    logger.info("LOAD TEST COMPLETED")


@events.request.add_listener
def on_request(request_type, name, response_time, response_length, response=None, exception=None, **kwargs):
    """Called for each request."""
    if exception:
        logger.error(f"Request failed: {name} - {exception}")
    elif response_time > 5000:  # slow requests (>5 seconds)
        logger.warning(f"Slow request: {name} took {response_time}ms")
