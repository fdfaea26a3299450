import traceback
from fastapi import APIRouter, Depends, HTTPException, Request, status
from ..models import models
from ..helper import oauth2
from ..helper.utils import setup_logging
from ..config.security_config import is_blank
from ..service.authentication_service import AuthenticationService
from ..service.user_login_service import UserLoginService
from ..service.account_creation_service import AccountCreationService

auth_api = APIRouter(tags=["Authentication"]) # create a router for the mock api

logger = setup_logging() # initialize logger


def get_authentication_service(request: Request) -> AuthenticationService:
    return request.app.state.authentication_service


def get_user_login_service(request: Request) -> UserLoginService:
    return request.app.state.user_login_service


def get_account_creation_service(request: Request) -> AccountCreationService:
    return request.app.state.account_creation_service


def missing_fields_message(username, password):
    if is_blank(username) and is_blank(password):
        return "Both username and password are required"
    if is_blank(username):
        return "Username is required"
    if is_blank(password):
        return "Password is required"
    return None


@auth_api.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy"}


@auth_api.post(
    "/api/auth/token",
    status_code=status.HTTP_200_OK,
    response_model=models.AuthenticationResponse,
    responses={400: {"model": models.res}, 401: {"model": models.res}},
)
async def auth_token(data: models.AuthenticationRequest, service: AuthenticationService = Depends(get_authentication_service)):
    """Issue a mock JWT for an admin account.

    Returns:
        AuthenticationResponse: token, expiry one hour from now, username and welcome message.

    Raises:
        HTTPException:
            - 400 if username or password is blank.
            - 401 if the credentials are not in the admin table.
            - 500 for any unexpected error.
    """
    try:
        missing = missing_fields_message(data.username, data.password)
        if missing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing)

        result = await service.authenticate(data)
        if result is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"token request failed: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@auth_api.post(
    "/api/user/login",
    status_code=status.HTTP_200_OK,
    response_model=models.UserLoginResponse,
    responses={401: {"model": models.res}},
)
async def user_login(data: models.UserLoginRequest, service: UserLoginService = Depends(get_user_login_service)):
    try:
        result = await service.user_login(data)
        if result is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"user login failed: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@auth_api.post(
    "/api/account/create",
    status_code=status.HTTP_200_OK,
    response_model=models.CreateAccountResponse,
    responses={400: {"model": models.res}, 401: {"model": models.res}, 409: {"model": models.res}},
)
async def create_account(
    data: models.CreateAccountRequest,
    current_user: models.TokenData = Depends(oauth2.get_current_user),
    service: AccountCreationService = Depends(get_account_creation_service),
):
    """Create an account on behalf of the user named in the bearer token.

    Raises:
        HTTPException:
            - 400 if a field is blank or fails format validation.
            - 401 if the bearer token is missing, malformed or expired (raised by get_current_user).
            - 409 if the username is already registered.
            - 500 for any unexpected error.
    """
    try:
        missing = missing_fields_message(data.username, data.password)
        if missing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing)

        result = await service.create_account(data, current_user.username)
        if result is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid username or password format")
        if not result.success:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=result.message)
        return result

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"account creation failed: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
