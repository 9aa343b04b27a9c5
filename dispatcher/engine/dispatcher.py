"""Dispatcher -- entry point that resolves, records and exposes scheduled notifications."""

from __future__ import annotations

import logging
import threading

from dispatcher.config import SchedulingRules
from dispatcher.engine.arrival_time import resolve_arrival_time
from dispatcher.engine.log_buffer import account_extra
from dispatcher.engine.schedule_store import (
    Notification,
    ScheduledNotification,
    ScheduleStore,
)

logger = logging.getLogger("engine.dispatcher")


class Dispatcher:
    """Owns one ScheduleStore and assigns delivery times to submitted notifications.

    Resolving a time and appending it happen under a single lock, so two
    concurrent submissions can never be resolved against the same snapshot.
    """

    def __init__(
        self,
        store: ScheduleStore | None = None,
        rules: SchedulingRules | None = None,
    ) -> None:
        self._store = store if store is not None else ScheduleStore()
        self._rules = rules or SchedulingRules()
        self._lock = threading.Lock()

    @property
    def store(self) -> ScheduleStore:
        return self._store

    def submit(self, notification: Notification) -> ScheduledNotification:
        """Resolve a delivery time for ``notification`` and record it.

        Returns:
            The committed ScheduledNotification.
        """
        with self._lock:
            scheduled_time = resolve_arrival_time(notification, self._store, self._rules)
            entry = ScheduledNotification(
                notification=notification,
                scheduled_delivery_time=scheduled_time,
            )
            self._store.append(entry)

        logger.info(
            "Scheduled %s for %s priority=%s created=%s at %s",
            notification.id,
            notification.messenger_account,
            notification.priority.value,
            notification.created.isoformat(),
            scheduled_time.isoformat(),
            extra=account_extra(notification.messenger_account),
        )
        return entry

    def ordered_schedule(
        self, account: str | None = None
    ) -> list[ScheduledNotification]:
        """Snapshot of the schedule, ascending by delivery time.

        Args:
            account: Only include this messenger account (None = all accounts).
        """
        with self._lock:
            if account is None:
                return self._store.ordered_view()
            return self._store.by_account(account)

    def count(self) -> int:
        return len(self._store)

    def accounts(self) -> set[str]:
        with self._lock:
            return self._store.accounts()
