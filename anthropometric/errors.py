# anthropometric/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base for every failure a handler reports to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# --- 401 ---------------------------------------------------------------------
class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token, authorization denied"


class InvalidToken(Unauthenticated):
    message = "Invalid token"


class TokenExpired(Unauthenticated):
    message = "Token expired"


class UserNotFound(Unauthenticated):
    message = "User not found"


# --- 403 / 404 ---------------------------------------------------------------
class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not authorized"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


# --- 400 ---------------------------------------------------------------------
class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class InvalidCredentials(BadRequest):
    message = "Invalid credentials"


class Conflict(BadRequest):
    message = "User already exists"


class ValidationError(BadRequest):
    message = "Invalid request"


# --- 500 ---------------------------------------------------------------------
class InternalError(ApiError):
    pass


def _body(message: str) -> dict:
    return {"message": message}


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or ValidationError.message


def register_error_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"message": ...}`` with the mapped status."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(_body(exc.message), status_code=exc.status_code)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(_body(str(exc.detail)), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(_body(_validation_message(exc)), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError):
        logger.exception("store failure on %s %s", request.method, request.url.path)
        return JSONResponse(_body(InternalError.message), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(_body(InternalError.message), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
