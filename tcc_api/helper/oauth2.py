from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from .auth_helper import auth_token
from .utils import setup_logging

# auto_error is off so a missing header ends up as 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)
logger = setup_logging() # initialize logger


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        logger.warning("request without bearer token rejected")
        raise credentials_exception

    return auth_token.verify_token(credentials.credentials, credentials_exception)
