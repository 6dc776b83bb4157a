"""HTTP middleware for the catalog server."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from catalog.server.logger import get_logger


logger = get_logger(__name__)


def _request_uri(request: Request) -> str:
    """Path and query exactly as sent, without percent-decoding."""
    raw_path = request.scope.get("raw_path") or request.scope["path"].encode("utf-8")
    path = raw_path.decode("latin-1")
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _remote_addr(request: Request) -> str:
    if request.client is None:
        return "-"
    return f"{request.client.host}:{request.client.port}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, URI and remote address of every request before dispatch."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        logger.info(
            "%s %s %s", request.method, _request_uri(request), _remote_addr(request)
        )
        return await call_next(request)
