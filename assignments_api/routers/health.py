import logging

from fastapi import APIRouter, Request, Response, status

from assignments_api.core.errors import NO_CACHE_HEADERS, ValidationFailed
from assignments_api.core.health import health_monitor

logger = logging.getLogger(__name__)

router = APIRouter()


def _has_body(request: Request) -> bool:
    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            return int(content_length) > 0
        except ValueError:
            return True
    return "transfer-encoding" in request.headers


@router.api_route(
    "/healthz",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    responses={
        400: {"description": "Not a bodiless GET without query parameters"},
        503: {"description": "Database unreachable"},
    },
)
def healthz(request: Request):
    if request.method != "GET" or _has_body(request) or request.query_params:
        logger.warning("Malformed health probe: %s %s", request.method, request.url)
        raise ValidationFailed(headers=NO_CACHE_HEADERS)

    healthy = health_monitor.refresh()
    if healthy:
        logger.info("Health check succeeded")
    else:
        logger.error("Health check failed")

    return Response(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        headers=NO_CACHE_HEADERS,
    )
