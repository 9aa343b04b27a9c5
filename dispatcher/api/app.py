"""FastAPI application factory for the Notification Dispatcher API."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Configure root logger so all application logs are visible in container output
logging.basicConfig(
    level=os.environ.get("DISPATCHER_LOG_LEVEL", "INFO"),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
from fastapi.middleware.cors import CORSMiddleware

from dispatcher.config import get_config
from dispatcher.engine.dispatcher import Dispatcher
from dispatcher.engine.log_buffer import LogBuffer, BufferHandler

logger = logging.getLogger("api")

VERSION = "0.1.0"


def create_app(
    dispatcher: Dispatcher | None = None,
    log_buffer: LogBuffer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    All dependencies are injectable for testing. When called with no
    arguments, a fresh Dispatcher is built from the global configuration.

    Args:
        dispatcher: Injected dispatcher (creates default if None).
        log_buffer: Injected log buffer (creates default if None).

    Returns:
        Configured FastAPI instance.
    """
    cfg = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan -- log startup and shutdown."""
        logger.info(
            "Notification Dispatcher API v%s starting (same-account=%s, low-interval=%s, guard=%s)",
            VERSION,
            cfg.rules.same_account_spacing,
            cfg.rules.low_priority_interval,
            cfg.rules.cross_account_guard,
        )
        yield
        logger.info(
            "Shutting down Dispatcher API with %d scheduled notifications",
            app.state.dispatcher.count(),
        )
        logging.getLogger().removeHandler(app.state.log_handler)

    app = FastAPI(
        title="Notification Dispatcher API",
        description="Assigns conflict-avoiding delivery times to notifications.",
        version=VERSION,
        lifespan=lifespan,
    )

    # ── Shared state ──────────────────────────────────────────────────
    app.state.dispatcher = dispatcher or Dispatcher(rules=cfg.rules)
    app.state.log_buffer = log_buffer or LogBuffer()

    # Root-level BufferHandler, detached again on shutdown.
    app.state.log_handler = BufferHandler(app.state.log_buffer)
    app.state.log_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logging.getLogger().addHandler(app.state.log_handler)

    # ── CORS ──────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────
    from dispatcher.api.routes.health import router as health_router
    from dispatcher.api.routes.notifications import router as notifications_router
    from dispatcher.api.routes.logs import router as logs_router

    app.include_router(health_router)
    app.include_router(notifications_router)
    app.include_router(logs_router)

    return app
