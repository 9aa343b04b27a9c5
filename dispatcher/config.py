"""Dispatcher configuration -- scheduling rules, HTTP server, runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta


@dataclass
class SchedulingRules:
    """Spacing constants applied by the arrival-time resolver."""

    same_account_spacing: timedelta = field(
        default_factory=lambda: timedelta(
            seconds=float(
                os.environ.get("DISPATCHER_SAME_ACCOUNT_SPACING_SECONDS", "60")
            )
        )
    )
    low_priority_interval: timedelta = field(
        default_factory=lambda: timedelta(
            hours=float(os.environ.get("DISPATCHER_LOW_PRIORITY_INTERVAL_HOURS", "24"))
        )
    )
    cross_account_guard: timedelta = field(
        default_factory=lambda: timedelta(
            seconds=float(
                os.environ.get("DISPATCHER_CROSS_ACCOUNT_GUARD_SECONDS", "10")
            )
        )
    )

    def __post_init__(self) -> None:
        # A throttled Low is deferred by exactly one calendar day, so a longer
        # release interval could defer it to before its own creation time.
        if self.low_priority_interval > timedelta(hours=24):
            raise ValueError(
                f"low_priority_interval must not exceed 24 hours, got {self.low_priority_interval}"
            )
        if self.same_account_spacing < timedelta(0) or self.cross_account_guard < timedelta(0):
            raise ValueError("Scheduling spacings must not be negative")


@dataclass
class DispatcherConfig:
    """Top-level configuration for the notification dispatcher."""

    rules: SchedulingRules = field(default_factory=SchedulingRules)
    log_level: str = field(
        default_factory=lambda: os.environ.get("DISPATCHER_LOG_LEVEL", "INFO")
    )
    host: str = field(
        default_factory=lambda: os.environ.get("DISPATCHER_HOST", "127.0.0.1")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("DISPATCHER_PORT", "9750"))
    )
    allowed_origins: list[str] = field(
        default_factory=lambda: os.environ.get(
            "ALLOWED_ORIGINS", "http://localhost:3000"
        ).split(",")
    )


# Singleton for convenience
_config: DispatcherConfig | None = None


def get_config() -> DispatcherConfig:
    """Get or create the global dispatcher configuration."""
    global _config
    if _config is None:
        _config = DispatcherConfig()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
