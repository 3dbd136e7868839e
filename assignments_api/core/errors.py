"""
Error taxonomy of the request pipeline.

Every rejection is an ``HTTPException`` with a fixed status code, so helpers can
raise them anywhere below a route and FastAPI turns them into a response.
The body follows what was passed as ``detail``: ``None`` -> empty,
``str`` -> plain text, ``dict`` -> JSON.
"""

from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}

SYNTAX_ERROR = {"error": "Syntax error"}


class ApiError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: Any = None, headers: dict[str, str] | None = None):
        # starlette replaces a missing detail with the status phrase
        self.body = detail
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)


class ServiceUnavailable(ApiError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, detail: Any = None):
        super().__init__(detail, headers=NO_CACHE_HEADERS)


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: Any = None):
        super().__init__(detail, headers={"WWW-Authenticate": 'Basic realm="assignments"'})


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class DeadlinePassed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AssignmentInUse(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def render_error(exc: ApiError) -> Response:
    if exc.body is None:
        return Response(status_code=exc.status_code, headers=exc.headers)
    if isinstance(exc.body, str):
        return PlainTextResponse(exc.body, status_code=exc.status_code, headers=exc.headers)
    return JSONResponse(exc.body, status_code=exc.status_code, headers=exc.headers)


async def api_error_handler(request: Request, exc: ApiError) -> Response:
    return render_error(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    return JSONResponse(SYNTAX_ERROR, status_code=status.HTTP_400_BAD_REQUEST)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
