"""Log access routes -- exposes the in-memory log ring buffer."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from dispatcher.api.deps import get_log_buffer
from dispatcher.api.models import LogEntryResponse
from dispatcher.engine.log_buffer import LogBuffer

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("/", response_model=list[LogEntryResponse])
async def list_logs(
    account: str | None = None,
    level: str | None = None,
    limit: int = Query(default=100, ge=1, le=2000),
    since: str | None = None,
    log_buffer: LogBuffer = Depends(get_log_buffer),
) -> list[LogEntryResponse]:
    """Query recent dispatcher log entries from the in-memory ring buffer.

    Args:
        account: Filter to logs associated with this messenger account.
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        limit: Maximum entries to return (default 100, max 2000).
        since: ISO-8601 timestamp -- only return entries after this time.
    """
    since_dt: datetime | None = None
    if since:
        try:
            since_dt = datetime.fromisoformat(since)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid 'since' timestamp: {since}")
        if since_dt.tzinfo is None:
            since_dt = since_dt.replace(tzinfo=timezone.utc)

    entries = log_buffer.query(
        account=account,
        level=level,
        since=since_dt,
        limit=limit,
    )

    return [
        LogEntryResponse(
            timestamp=e.timestamp.isoformat(),
            level=e.level,
            logger_name=e.logger_name,
            message=e.message,
            account=e.account,
        )
        for e in entries
    ]
