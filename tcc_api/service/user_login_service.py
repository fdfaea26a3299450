import asyncio
from typing import List, Optional
from ..models import models
from ..config.security_config import is_blank
from ..helper.utils import setup_logging
from .credential_store import ICredentialStore, InMemoryCredentialStore

logger = setup_logging() # initialize logger

USER_CREDENTIALS = {
    "mixtest": "11223344",
    "testuser1": "password123",
    "adminuser": "admin2024",
    "user1": "pass1",
    "user2": "pass2",
    "user3": "pass3",
    "demouser": "demo123",
    "qauser": "testing2024",
}


class UserLoginService:
    """Mock end-user login. Holds its own credential table, separate from the admin one."""

    def __init__(self, store: Optional[ICredentialStore] = None, delay: float = 0.001):
        self.store = store if store is not None else InMemoryCredentialStore(USER_CREDENTIALS)
        self.delay = delay

    async def user_login(self, request: models.UserLoginRequest) -> Optional[models.UserLoginResponse]:
        """
        Authenticate a user with username and password.

        Args:
            request: login request carrying the credentials

        Returns:
            UserLoginResponse with the welcome message, or None when the credentials are rejected

        Raises:
            ValueError: if request is None
        """
        if request is None:
            raise ValueError("request must not be None")

        await asyncio.sleep(self.delay) # simulate async operation

        if not self.validate_user_credentials(request.username, request.password):
            logger.warning(f"user login failed for: {request.username}")
            return None

        logger.info(f"{request.username} logged in successfully")
        return models.UserLoginResponse(message=f"Welcome User: {request.username}")

    def validate_user_credentials(self, username: Optional[str], password: Optional[str]) -> bool:
        if is_blank(username) or is_blank(password):
            return False
        expected = self.store.get_password(username)
        return expected is not None and expected == password

    def add_test_user(self, username: str, password: str) -> None:
        if is_blank(username) or is_blank(password):
            raise ValueError("Username and password cannot be null or empty")
        self.store.set_password(username, password)

    def remove_test_user(self, username: str) -> None:
        if is_blank(username):
            return
        self.store.remove(username)

    def get_test_users(self) -> List[str]:
        return list(self.store.usernames())

    def clear_test_users(self) -> None:
        self.store.clear()

    def user_exists(self, username: str) -> bool:
        if is_blank(username):
            return False
        return self.store.get_password(username) is not None
