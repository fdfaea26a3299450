import time
import traceback
import httpx
from ..config.settings import TestConfiguration
from .utils import setup_logging

logger = setup_logging() # initialize logger


class ApiClient:
    """Thin httpx wrapper for the auth and account endpoints.

    Transport failures (connection refused, timeouts) are retried
    ``config.retry_attempts`` times; any HTTP response, including 4xx/5xx,
    is returned to the caller as is.
    """

    def __init__(self, config: TestConfiguration = None, client: httpx.Client = None, retry_delay: float = 1.0):
        self.config = config or TestConfiguration()
        self.client = client or self.config.create_http_client()
        self.retry_delay = retry_delay

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.client.close()

    def post_json(self, path: str, payload=None, token: str = None, content: str = None, headers: dict = None):
        request_headers = {"Content-Type": "application/json"}
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        if headers:
            request_headers.update(headers)

        retries = max(self.config.retry_attempts, 1)
        for attempt in range(1, retries + 1):
            try:
                if content is not None:
                    return self.client.post(path, content=content, headers=request_headers)
                return self.client.post(path, json=payload, headers=request_headers)
            except httpx.TransportError as e:
                logger.warning(f"POST {path} failed on attempt {attempt}/{retries}: {e}")
                if attempt == retries:
                    logger.error(f"POST {path} failed after {retries} attempts: {traceback.format_exc()}")
                    raise
                time.sleep(self.retry_delay)

    def authenticate(self, username: str, password: str):
        return self.post_json(self.config.auth_endpoint, {"username": username, "password": password})

    def create_account(self, username: str, password: str, token: str = None):
        return self.post_json(self.config.account_endpoint, {"username": username, "password": password}, token=token)

    def get_token(self) -> str:
        response = self.authenticate(self.config.valid_username, self.config.valid_password)
        if response.status_code != 200:
            raise RuntimeError(f"Failed to get authentication token: {response.status_code}")
        token = response.json().get("token")
        if not token:
            raise RuntimeError("Failed to get authentication token")
        return token
