"""Notification dispatcher engine -- schedule store, arrival-time resolver, logs."""

from dispatcher.engine.schedule_store import (
    Notification,
    NotificationPriority,
    ScheduledNotification,
    ScheduleStore,
)
from dispatcher.engine.arrival_time import resolve_arrival_time
from dispatcher.engine.dispatcher import Dispatcher
from dispatcher.engine.log_buffer import LogBuffer, BufferHandler

__all__ = [
    "Notification",
    "NotificationPriority",
    "ScheduledNotification",
    "ScheduleStore",
    "resolve_arrival_time",
    "Dispatcher",
    "LogBuffer",
    "BufferHandler",
]
