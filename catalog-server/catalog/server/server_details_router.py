import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.types import Receive, Scope, Send

from catalog.server import __version__
from catalog.server.config import Config
from catalog.server.dependencies import get_config, get_item_store
from catalog.server.item_store import ItemStore
from catalog.server.models import HealthStatus, ServerInfo, SuccessResponse


server_details_router = APIRouter(prefix="", tags=["Server Details"])
_start_time = time.time()


def _rfc3339_now() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _health_response() -> SuccessResponse[HealthStatus]:
    return SuccessResponse(data=HealthStatus(status="healthy", time=_rfc3339_now()))


@server_details_router.get("/alive")
async def alive():
    return {"status": "ok"}


@server_details_router.get("/health")
async def health() -> SuccessResponse[HealthStatus]:
    return _health_response()


class HealthAnyMethod:
    """Answers /health for every method, extension methods included.

    Plain function endpoints are limited to GET by Starlette, so this is a raw
    ASGI callable. GET itself is served by the documented route above.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = JSONResponse(_health_response().model_dump(mode="json"))
        await response(scope, receive, send)


server_details_router.add_route(
    "/health", HealthAnyMethod(), methods=None, include_in_schema=False
)


@server_details_router.get("/server_info")
async def get_server_info(
    config: Config = Depends(get_config),
    store: ItemStore = Depends(get_item_store),
) -> SuccessResponse[ServerInfo]:
    return SuccessResponse(
        data=ServerInfo(
            uptime=int(time.time() - _start_time),
            title=config.title,
            version=__version__,
            item_count=len(store),
        )
    )
