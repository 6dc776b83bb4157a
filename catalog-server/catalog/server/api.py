"""FastAPI application for the catalog server."""

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.server.config import Config
from catalog.server.item_store import ItemStore, create_default_store
from catalog.server.items_router import items_router
from catalog.server.logger import get_logger
from catalog.server.middleware import RequestLoggingMiddleware
from catalog.server.models import ErrorResponse
from catalog.server.server_details_router import server_details_router


logger = get_logger(__name__)

METHOD_NOT_ALLOWED = "Method not allowed"
INTERNAL_SERVER_ERROR = "Internal Server Error"


def _error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(mode="json"),
        headers=headers,
    )


def _add_exception_handlers(api: FastAPI) -> None:
    """Render every failure as an error envelope."""

    @api.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = METHOD_NOT_ALLOWED
        else:
            message = str(exc.detail)
        return _error_response(exc.status_code, message, exc.headers)

    @api.exception_handler(RequestValidationError)
    async def _validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return _error_response(422, message)

    @api.exception_handler(Exception)
    async def _unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR
        )


def create_app(
    config: Config | None = None, item_store: ItemStore | None = None
) -> FastAPI:
    """Create the catalog server application.

    Args:
        config: Server configuration. Defaults when omitted; the listen
            address is resolved by `catalog.server.__main__`, not here.
        item_store: Items to serve. The three seed items when omitted.

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config()
    if item_store is None:
        item_store = create_default_store()

    app = FastAPI(title=config.title, description="Read-only item catalog")
    app.state.config = config
    app.state.item_store = item_store

    app.add_middleware(RequestLoggingMiddleware)

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(items_router)

    app.include_router(server_details_router)
    app.include_router(api_router)
    _add_exception_handlers(app)
    return app


api = create_app()
