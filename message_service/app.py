"""The message service: one GET route answering with a constant message."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from techcrush.config import AppConfig, load_config
from techcrush.logs import get_logger, setup_logging
from techcrush.models import Message

logger = get_logger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the FastAPI application for ``config`` (resolved from the environment if omitted)."""
    if config is None:
        config = load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Message service listening", url=config.base_url, path=config.path)
        yield
        logger.info("Message service stopped")

    app = FastAPI(title="Message Service", lifespan=lifespan)

    # Any origin may read the message.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get(config.path)
    async def message():
        logger.info(f"Received request for {config.path}")
        return Message(config.message).to_dict()

    return app


def run(config: Optional[AppConfig] = None) -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    if config is None:
        config = load_config()
    setup_logging(config.log_level, config.log_format)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


# Run with: uvicorn message_service.app:create_app --factory --port 5000
