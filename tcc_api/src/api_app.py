from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
from .auth_api import auth_api
from .exception_handlers import http_exception_handler, validation_exception_handler
from ..service.authentication_service import AuthenticationService
from ..service.user_login_service import UserLoginService
from ..service.account_creation_service import AccountCreationService


def create_app(
    authentication_service: AuthenticationService = None,
    user_login_service: UserLoginService = None,
    account_creation_service: AccountCreationService = None,
) -> FastAPI:
    """Build the mock API. Every app instance owns a fresh set of services."""
    app = FastAPI(title="TCC Test API")
    app.state.authentication_service = authentication_service or AuthenticationService()
    app.state.user_login_service = user_login_service or UserLoginService()
    app.state.account_creation_service = account_creation_service or AccountCreationService()

    app.include_router(auth_api)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app
