"""Arrival-Time Resolver -- picks a conflict-avoiding delivery time for a notification.

The resolver only reads the store. Rules are applied in a fixed order:

1. Empty store: deliver at creation time.
2. Same-account spacing. Low priority is throttled to one delivery per day,
   High priority is kept at least ``same_account_spacing`` after the last
   relevant delivery on the account.
3. Cross-account guard: a single forward pass over other accounts' times,
   pushing the candidate past any time closer than ``cross_account_guard``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from dispatcher.config import SchedulingRules
from dispatcher.engine.log_buffer import account_extra
from dispatcher.engine.schedule_store import (
    Notification,
    NotificationPriority,
    ScheduledNotification,
    ScheduleStore,
)

logger = logging.getLogger("engine.arrival_time")


def next_day_same_time(moment: datetime) -> datetime:
    """Advance the calendar date by one day, keeping the wall-clock time and tzinfo."""
    return datetime.combine(moment.date() + timedelta(days=1), moment.timetz())


def resolve_arrival_time(
    notification: Notification,
    store: ScheduleStore,
    rules: SchedulingRules | None = None,
) -> datetime:
    """Compute the scheduled delivery time for ``notification``.

    Args:
        notification: The notification being submitted (not yet in the store).
        store: Current schedule. Never mutated here.
        rules: Spacing constants (defaults reproduce 1 min / 24 h / 10 s).

    Returns:
        The delivery time to commit for the notification.
    """
    if len(store) == 0:
        return notification.created

    rules = rules or SchedulingRules()
    scheduled = notification.created

    account_entries = store.by_account(notification.messenger_account)
    if account_entries:
        if notification.priority == NotificationPriority.LOW:
            scheduled = _apply_low_priority(notification, account_entries, scheduled, rules)
        else:
            scheduled = _apply_high_priority(notification, account_entries, scheduled, rules)

    return _apply_cross_account_guard(
        notification, store.other_accounts(notification.messenger_account), scheduled, rules
    )


def _apply_low_priority(
    notification: Notification,
    account_entries: list[ScheduledNotification],
    scheduled: datetime,
    rules: SchedulingRules,
) -> datetime:
    last_low: ScheduledNotification | None = None
    for entry in account_entries:
        if entry.priority == NotificationPriority.LOW:
            last_low = entry

    if last_low is None:
        min_time = account_entries[-1].scheduled_delivery_time + rules.same_account_spacing
        return max(scheduled, min_time)

    gap = notification.created - last_low.scheduled_delivery_time
    if gap >= rules.low_priority_interval:
        return notification.created

    deferred = next_day_same_time(last_low.scheduled_delivery_time)
    logger.debug(
        "Low priority throttle for %s: last low at %s, deferring to %s",
        notification.id,
        last_low.scheduled_delivery_time.isoformat(),
        deferred.isoformat(),
        extra=account_extra(notification.messenger_account),
    )
    return deferred


def _apply_high_priority(
    notification: Notification,
    account_entries: list[ScheduledNotification],
    scheduled: datetime,
    rules: SchedulingRules,
) -> datetime:
    # Low deliveries only hold back a High one when they land on its creation day.
    created_day = notification.created.date()
    relevant = [
        e
        for e in account_entries
        if e.priority == NotificationPriority.HIGH
        or e.scheduled_delivery_time.date() == created_day
    ]
    if not relevant:
        return scheduled

    last = max(relevant, key=lambda e: e.scheduled_delivery_time)
    min_time = last.scheduled_delivery_time + rules.same_account_spacing
    return max(scheduled, min_time)


def _apply_cross_account_guard(
    notification: Notification,
    other_entries: list[ScheduledNotification],
    scheduled: datetime,
    rules: SchedulingRules,
) -> datetime:
    # Single ascending pass; no re-scan after a shift.
    for entry in other_entries:
        other_time = entry.scheduled_delivery_time
        if abs(scheduled - other_time) < rules.cross_account_guard:
            scheduled = other_time + rules.cross_account_guard
            logger.debug(
                "Cross-account guard: shifted %s past %s (account %s) to %s",
                notification.id,
                other_time.isoformat(),
                entry.messenger_account,
                scheduled.isoformat(),
                extra=account_extra(notification.messenger_account),
            )
    return scheduled
