"""Schedule Store -- append-only record of notifications and their delivery times."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class NotificationPriority(str, Enum):
    HIGH = "high"
    LOW = "low"


def _new_notification_id() -> str:
    return f"notif-{uuid.uuid4().hex[:8]}"


@dataclass(frozen=True)
class Notification:
    """A notification bound for a messenger account."""

    messenger_account: str
    created: datetime
    priority: NotificationPriority
    id: str = field(default_factory=_new_notification_id)

    def __post_init__(self) -> None:
        if not self.messenger_account:
            raise ValueError("Notification requires a messenger account")
        if not isinstance(self.created, datetime):
            raise ValueError(
                f"Notification created must be a datetime, got {type(self.created).__name__}"
            )
        if not isinstance(self.priority, NotificationPriority):
            raise ValueError(f"Unrecognized notification priority: {self.priority!r}")


@dataclass(frozen=True)
class ScheduledNotification:
    """A notification paired with the delivery time it was committed at."""

    notification: Notification
    scheduled_delivery_time: datetime

    @property
    def messenger_account(self) -> str:
        return self.notification.messenger_account

    @property
    def priority(self) -> NotificationPriority:
        return self.notification.priority


def _by_time(entry: ScheduledNotification) -> datetime:
    return entry.scheduled_delivery_time


class ScheduleStore:
    """Insertion-ordered, append-only collection of scheduled notifications.

    Read views are sorted by scheduled delivery time with Python's stable
    ``sorted``, so entries sharing a time keep their insertion order.
    """

    def __init__(self) -> None:
        self._entries: list[ScheduledNotification] = []

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: ScheduledNotification) -> None:
        """Add an entry to the end of the store."""
        self._entries.append(entry)

    def by_account(self, account: str) -> list[ScheduledNotification]:
        """Entries for ``account``, ascending by scheduled time."""
        return sorted(
            (e for e in self._entries if e.messenger_account == account),
            key=_by_time,
        )

    def other_accounts(self, account: str) -> list[ScheduledNotification]:
        """Entries for every account except ``account``, ascending by scheduled time."""
        return sorted(
            (e for e in self._entries if e.messenger_account != account),
            key=_by_time,
        )

    def ordered_view(self) -> list[ScheduledNotification]:
        """All entries, ascending by scheduled time."""
        return sorted(self._entries, key=_by_time)

    def accounts(self) -> set[str]:
        return {e.messenger_account for e in self._entries}
