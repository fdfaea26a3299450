import asyncio
from datetime import datetime, timezone
from typing import Optional
from ..models import models
from ..config import security_config
from ..helper.utils import setup_logging
from .credential_store import IUsernameRegistry, InMemoryUsernameRegistry

logger = setup_logging() # initialize logger

RESERVED_USERNAMES = ("TCCTest", "admin", "existing_user")


class AccountCreationService:
    """Mock account registry.

    A username moves from unregistered to registered exactly once; there is no
    delete path. User ids are handed out sequentially from 1 and only on the
    success path, so rejected requests never consume an id.

    Args:
        registry: taken-username registry, seeded with RESERVED_USERNAMES when omitted.
        delay: simulated latency in seconds for create_account().
        lookup_delay: simulated latency in seconds for username_exists().
    """

    def __init__(self, registry: Optional[IUsernameRegistry] = None, delay: float = 0.05, lookup_delay: float = 0.01):
        self.registry = registry if registry is not None else InMemoryUsernameRegistry(RESERVED_USERNAMES)
        self.delay = delay
        self.lookup_delay = lookup_delay
        self._next_user_id = 1
        self._lock = asyncio.Lock()

    async def create_account(self, request: models.CreateAccountRequest, created_by: str) -> Optional[models.CreateAccountResponse]:
        """Create an account for request.username on behalf of created_by.

        Returns None when the username or password fails format validation,
        a response with success=False when the username is taken, and the
        created account otherwise.

        Raises:
            ValueError: if request is None
        """
        if request is None:
            raise ValueError("request must not be None")

        await asyncio.sleep(self.delay) # simulate async operation

        if not self.validate_username(request.username) or not self.validate_password(request.password):
            logger.warning(f"account creation rejected, invalid username or password format: {request.username}")
            return None

        # existence check and registration must not interleave
        async with self._lock:
            if await self.username_exists(request.username):
                logger.warning(f"account creation rejected, username already exists: {request.username}")
                return models.CreateAccountResponse(
                    success=False,
                    message="Username already exists",
                    username=request.username,
                    created_by=created_by,
                )

            self.registry.add(request.username)
            user_id = str(self._next_user_id)
            self._next_user_id += 1

        logger.info(f"account {request.username} created with id {user_id} by {created_by}")
        return models.CreateAccountResponse(
            success=True,
            message="Account created successfully",
            user_id=user_id,
            username=request.username,
            created_at=datetime.now(timezone.utc),
            created_by=created_by,
        )

    def validate_username(self, username: str) -> bool:
        return security_config.validate_username(username)

    def validate_password(self, password: str) -> bool:
        return security_config.validate_password(password)

    async def username_exists(self, username: str) -> bool:
        await asyncio.sleep(self.lookup_delay) # simulate database check
        return self.registry.contains(username)
