"""FastAPI dependency injection functions for shared state."""

from __future__ import annotations

from fastapi import Request

from dispatcher.engine.dispatcher import Dispatcher
from dispatcher.engine.log_buffer import LogBuffer


def get_dispatcher(request: Request) -> Dispatcher:
    """Get the shared Dispatcher from app state."""
    return request.app.state.dispatcher


def get_log_buffer(request: Request) -> LogBuffer:
    """Get the shared LogBuffer from app state."""
    return request.app.state.log_buffer
