"""
Chat Gateway - Main Application Entry Point

This module provides the FastAPI application for the Chat Gateway service
and the command-line entry point that serves it with uvicorn.

The gateway accepts a simplified chat request on POST /chat, forwards it to
the upstream chat-completion API and relays the first choice's text in a
``{"message", "code"}`` envelope.

Usage:
    chat-gateway --api-key sk-... --port 10802
    python -m src.main -a sk-... -p 10802
"""

import argparse
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional, Sequence

import uvicorn
from fastapi import FastAPI

from src.api.middleware.logging import RequestLoggingMiddleware
from src.api.routes.chat import router as chat_router
from src.core.config import DEFAULT_PORT, LOG_LEVELS, Settings, get_settings
from src.observability.logging import configure_logging, get_logger
from src.providers.base import ProviderFactory
from src.services.chat import ChatService

# Application metadata
APP_NAME = "Chat Gateway"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Minimal relay from a simplified chat request to an upstream chat-completion API"


logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager for startup/shutdown events.

    In-flight requests are not drained or cancelled here; uvicorn stops
    accepting connections and the process exits after shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "starting",
        service=settings.service_name,
        version=APP_VERSION,
        environment=settings.environment,
        model=settings.model,
        fallback_api_key=settings.has_fallback_api_key,
    )
    app.state.initialized = True

    yield

    logger.info("shut down", service=settings.service_name)
    app.state.initialized = False


# =============================================================================
# Application Factory
# =============================================================================


def create_app(
    settings: Optional[Settings] = None,
    provider_factory: Optional[ProviderFactory] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The settings object (and the fallback credential it carries) is fixed
    here and shared read-only by every request.

    Args:
        settings: Application settings; defaults to the environment singleton.
        provider_factory: Upstream provider factory; defaults to OpenAI.

    Returns:
        FastAPI: Application exposing POST /chat only.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.chat_service = ChatService(settings, provider_factory=provider_factory)

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(chat_router)

    return app


app = create_app()


# =============================================================================
# Command Line Interface
# =============================================================================


def port_number(value: str) -> int:
    """argparse type for an unsigned 16-bit port."""
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 0 and 65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chat-gateway",
        description=APP_DESCRIPTION,
    )
    parser.add_argument(
        "-a",
        "--api-key",
        default=None,
        help="Fallback API key used when a request does not carry one",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=port_number,
        default=None,
        help=f"Port to listen on (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    """
    Build settings from the environment with CLI flags taking precedence.

    Flags left unset fall through to CHAT_GATEWAY_* variables and then
    to the field defaults.
    """
    overrides = {
        "api_key": args.api_key,
        "port": args.port,
        "host": args.host,
        "log_level": args.log_level,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the gateway until interrupted.

    The server runs in the foreground, so a listener that cannot bind
    ends the process instead of failing silently in the background.

    Returns:
        Process exit status: 0 after a clean shutdown, 1 if the listener
        never started.
    """
    args = parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(level=settings.log_level, force=True)

    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    server.run()

    if not server.started:
        logger.error("listener failed to start", host=settings.host, port=settings.port)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
