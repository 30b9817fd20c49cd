# forwardhook/main.py
"""
forwardhook - Main Application

Receives JSON webhooks, reshapes them with the configured field mappings
and forwards the result upstream.
"""

import argparse
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

import httpx
from fastapi import FastAPI

from . import __version__
from .api import webhooks_router
from .config import load_config
from .errors import ConfigError
from .logging import configure_logging, get_logger
from .settings import settings
from .webhooks import Dispatcher, Forwarder, ServerConfig, WebhookRegistry

logger = get_logger(__name__)


def create_app(
    config: ServerConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the FastAPI application for a loaded configuration.

    Args:
        config: Validated server configuration
        transport: Optional httpx transport for outbound calls (tests)
    """
    registry = WebhookRegistry.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the outbound client for the lifetime of the app."""
        forwarder = Forwarder(user_agent=config.user_agent, transport=transport)
        app.state.dispatcher = Dispatcher(config, forwarder, registry=registry)
        logger.info(
            "server_starting",
            webhooks=registry.names(),
            debug=config.debug,
            user_agent=config.user_agent,
        )

        yield

        await forwarder.aclose()
        logger.info("server_stopped")

    app = FastAPI(
        title="forwardhook",
        description="Reshape incoming JSON webhooks and forward them upstream.",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check():
        """Basic health check."""
        return {
            "status": "ok",
            "service": "forwardhook",
            "webhooks": len(registry),
            "debug": config.debug,
        }

    app.include_router(webhooks_router)
    return app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="forwardhook",
        description="Reshape incoming JSON webhooks and forward them upstream.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=settings.config_path,
        help="path to the JSON config file (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"forwardhook {__version__}")
    return parser.parse_args(argv)


def run(argv: Optional[List[str]] = None):
    """Run the server (entry point for CLI)."""
    import uvicorn

    args = parse_args(argv)
    configure_logging(level=settings.log_level, json_output=settings.log_json, force=True)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.critical("config_invalid", path=args.config, error=str(e))
        sys.exit(e.exit_code)

    logger.info("listening", host=settings.host, port=config.port)
    uvicorn.run(
        create_app(config),
        host=settings.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
