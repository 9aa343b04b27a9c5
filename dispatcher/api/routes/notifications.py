"""Notification submission and schedule routes."""

from __future__ import annotations

import logging
from datetime import timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from dispatcher.api.deps import get_dispatcher
from dispatcher.api.models import ScheduledNotificationResponse, SubmitNotificationRequest
from dispatcher.engine.dispatcher import Dispatcher
from dispatcher.engine.log_buffer import account_extra
from dispatcher.engine.schedule_store import Notification, ScheduledNotification

logger = logging.getLogger("api.notifications")

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _entry_to_response(entry: ScheduledNotification) -> ScheduledNotificationResponse:
    """Convert an internal ScheduledNotification to API response."""
    n = entry.notification
    return ScheduledNotificationResponse(
        id=n.id,
        messenger_account=n.messenger_account,
        priority=n.priority,
        created=n.created.isoformat(),
        scheduled_delivery_time=entry.scheduled_delivery_time.isoformat(),
    )


@router.post("/", response_model=ScheduledNotificationResponse, status_code=201)
async def submit_notification(
    body: SubmitNotificationRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> ScheduledNotificationResponse:
    """Submit a notification and return its scheduled delivery time."""
    created = body.created
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)

    kwargs = {"id": body.id} if body.id else {}
    try:
        notification = Notification(
            messenger_account=body.messenger_account,
            created=created,
            priority=body.priority,
            **kwargs,
        )
        entry = dispatcher.submit(notification)
    except ValueError as e:
        logger.warning(
            "Rejected notification for %s: %s",
            body.messenger_account,
            e,
            extra=account_extra(body.messenger_account),
        )
        raise HTTPException(status_code=400, detail=str(e))

    return _entry_to_response(entry)


@router.get("/schedule", response_model=list[ScheduledNotificationResponse])
async def ordered_schedule(
    account: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> list[ScheduledNotificationResponse]:
    """Get scheduled notifications, earliest delivery first.

    Args:
        account: Filter by messenger account (omit for all accounts).
        limit: Maximum entries to return (omit for all).
    """
    entries = dispatcher.ordered_schedule(account=account)
    if limit is not None:
        entries = entries[:limit]
    return [_entry_to_response(e) for e in entries]
