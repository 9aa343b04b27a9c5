"""Pydantic request/response models for the Dispatcher API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from dispatcher.engine.schedule_store import NotificationPriority


# ── Notifications ─────────────────────────────────────────────────────────


class SubmitNotificationRequest(BaseModel):
    """Request body for submitting a notification for scheduling."""

    id: str | None = Field(default=None, min_length=1, max_length=128)
    messenger_account: str = Field(..., min_length=1, max_length=128)
    created: datetime
    priority: NotificationPriority


class ScheduledNotificationResponse(BaseModel):
    """A notification with its committed delivery time."""

    id: str
    messenger_account: str
    priority: NotificationPriority
    created: str
    scheduled_delivery_time: str


# ── System ────────────────────────────────────────────────────────────────


class SystemInfoResponse(BaseModel):
    """System information snapshot."""

    version: str
    scheduled_notifications: int = 0
    accounts: int = 0


# ── Logs ──────────────────────────────────────────────────────────────────


class LogEntryResponse(BaseModel):
    """A single log entry from the in-memory ring buffer."""

    timestamp: str
    level: str
    logger_name: str
    message: str
    account: str | None = None
