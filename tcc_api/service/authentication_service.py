import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional
from ..models import models
from ..config.security_config import is_blank
from ..helper.auth_helper import auth_token
from ..helper.utils import setup_logging
from .credential_store import ICredentialStore, InMemoryCredentialStore

logger = setup_logging() # initialize logger

ADMIN_CREDENTIALS = {
    "TCCTest": "Test!456",
    "admin": "admin123",
    "testuser": "password",
}


class AuthenticationService:
    """Mock admin authentication backed by a fixed credential table.

    Args:
        store: credential store to validate against, seeded with
            ADMIN_CREDENTIALS when omitted.
        delay: simulated round trip in seconds for authenticate().
    """

    def __init__(self, store: Optional[ICredentialStore] = None, delay: float = 0.01):
        self.store = store if store is not None else InMemoryCredentialStore(ADMIN_CREDENTIALS)
        self.delay = delay

    async def authenticate(self, request: models.AuthenticationRequest) -> Optional[models.AuthenticationResponse]:
        if request is None:
            raise ValueError("request must not be None")

        await asyncio.sleep(self.delay) # simulate async operation

        if not self.validate_credentials(request.username, request.password):
            logger.warning(f"authentication failed for: {request.username}")
            return None

        token = self.generate_jwt_token(request.username)
        logger.info(f"{request.username} authenticated successfully")
        return models.AuthenticationResponse(
            token=token,
            expires=datetime.now(timezone.utc) + timedelta(seconds=auth_token.TOKEN_LIFETIME_SECONDS),
            username=request.username,
            message=f"Welcome Admin: {request.username}",
        )

    def validate_credentials(self, username: str, password: str) -> bool:
        if is_blank(username) or is_blank(password):
            return False
        expected = self.store.get_password(username)
        return expected is not None and expected == password

    def generate_jwt_token(self, username: str) -> str:
        return auth_token.generate_token(username)
