import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from assignments_api.core.current_user import parse_basic_authorization

logger = logging.getLogger(__name__)


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "failed"
    if status_code >= 400:
        return "rejected"
    return "ok"


def _claimed_email(request: Request) -> str:
    # only the email half of the credential is ever logged
    credentials = parse_basic_authorization(request.headers.get("authorization"))
    return credentials[0] if credentials else "-"


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s user=%s -> %s %s (%.3fs)",
            request.method,
            request.url.path,
            _claimed_email(request),
            response.status_code,
            _outcome(response.status_code),
            duration,
        )

        return response
