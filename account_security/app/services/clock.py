"""
Clock abstraction.

Every expiry and lockout computation reads the time through a Clock so
tests can move time forward instead of sleeping. All values are naive UTC.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current time as a naive UTC datetime"""
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None)
