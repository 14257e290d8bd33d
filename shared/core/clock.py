"""Process clock and service identity."""

import time
from dataclasses import dataclass
from datetime import UTC, datetime


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as ISO-8601 UTC with millisecond precision."""
    if moment is None:
        moment = datetime.now(UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProcessClock:
    """Records when the service started and derives its uptime.

    Uptime is measured against the monotonic clock, so wall clock
    adjustments never make it go backwards.
    """

    def __init__(self) -> None:
        self.started_at = datetime.now(UTC)
        self._started_monotonic = time.monotonic()

    def uptime_seconds(self) -> float:
        return time.monotonic() - self._started_monotonic


@dataclass(frozen=True)
class ServiceIdentity:
    name: str
    version: str
    environment: str
