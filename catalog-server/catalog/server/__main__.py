import argparse
import os
import sys

import uvicorn
from pydantic import ValidationError

from catalog.server.api import create_app
from catalog.server.config import Config
from catalog.server.logger import DEBUG, get_logger
from catalog.server.logging_config import LOGGING_CONFIG


logger = get_logger(__name__)

APP_IMPORT_STRING = "catalog.server.api:api"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Catalog Server")
    parser.add_argument(
        "--host", default=None, help="Host to bind to (default: $HOST or 0.0.0.0)"
    )
    parser.add_argument(
        "--port", default=None, help="Port to bind to (default: $PORT or 8080)"
    )
    parser.add_argument(
        "--reload",
        dest="reload",
        default=False,
        action="store_true",
        help="Enable auto-reload (disabled by default)",
    )
    return parser


def load_config(argv: list[str] | None = None) -> tuple[Config, bool]:
    """Resolve the server config from the environment and command line.

    Flags replace the matching environment values before validation, so a
    flag wins even when the environment value is invalid.
    """
    args = _build_parser().parse_args(argv)
    env = dict(os.environ)
    if args.host is not None:
        env["HOST"] = args.host
    if args.port is not None:
        env["PORT"] = args.port
    return Config.from_env(env), args.reload


def run_server(config: Config, reload: bool = False) -> bool:
    """Serve until shutdown. Returns False when the listener never started."""
    log_level = "debug" if DEBUG else "info"
    if reload:
        # The reloader imports the app by name in a child process
        uvicorn.run(
            APP_IMPORT_STRING,
            host=config.host,
            port=config.port,
            reload=True,
            log_level=log_level,
            log_config=LOGGING_CONFIG,
            access_log=False,
        )
        return True

    server = uvicorn.Server(
        uvicorn.Config(
            create_app(config),
            host=config.host,
            port=config.port,
            log_level=log_level,
            log_config=LOGGING_CONFIG,
            access_log=False,
        )
    )
    try:
        server.run()
    except SystemExit:
        # Some uvicorn releases exit from inside startup on a bind failure
        if server.started:
            raise
    return server.started


def main(argv: list[str] | None = None) -> None:
    try:
        config, reload = load_config(argv)
    except ValidationError as e:
        logger.error("Invalid server configuration: %s", e)
        sys.exit(1)

    logger.info("Server starting on %s:%s", config.host, config.port)
    logger.info("API docs available at http://%s:%s/docs", config.host, config.port)
    if DEBUG:
        logger.info("DEBUG mode: ENABLED")

    if not run_server(config, reload=reload):
        logger.error("Server failed to start on %s:%s", config.host, config.port)
        sys.exit(1)


if __name__ == "__main__":
    main()
