"""Exception handlers that render every error as {"message": ...}."""
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.requests import Request
from ..helper.utils import setup_logging

logger = setup_logging() # initialize logger


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON and missing fields are a 400, not FastAPI's default 422."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        message = "Invalid JSON format"
    else:
        message = "Invalid request: " + "; ".join(
            f"{error['loc'][-1]}: {error.get('msg', '')}" for error in errors if error.get("loc")
        )
    logger.warning(f"bad request on {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})
