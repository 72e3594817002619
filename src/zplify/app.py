"""FastAPI application factory for zplify."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from zplify import __version__
from zplify.api import routes as api_routes
from zplify.config import load_config, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Loading configuration from {settings.config_file}")
    config = load_config(settings.config_file)

    if config.api_key:
        logger.info("API key authentication enabled")
    logger.info(
        f"Conversion defaults: compress={config.conversion.compress}, "
        f"black_limit={config.conversion.black_limit}, header_footer={config.add_header_footer}"
    )

    api_routes.set_app_state(config)

    logger.info("zplify startup complete")

    yield

    logger.info("zplify shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="zplify",
        description="Convert images to ZPL ^GFA graphic commands",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(
        api_routes.router,
        dependencies=[Depends(api_routes.verify_api_key)],
    )

    return app


# Default app instance for uvicorn
app = create_app()
