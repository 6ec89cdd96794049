"""Base usage-access abstraction."""
from __future__ import annotations

from abc import ABC, abstractmethod


class UsageAccess(ABC):
    """Per-platform gate in front of the usage query.

    Implementations only report and request the grant; they never query
    usage themselves.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform name for logging."""

    @property
    @abstractmethod
    def supports_usage_stats(self) -> bool:
        """Whether the platform has a usage-tracking facility at all."""

    @abstractmethod
    async def check_granted(self) -> bool:
        """Return True if usage access is currently granted."""

    @abstractmethod
    async def request_grant(self) -> bool:
        """Send the user to the place where the grant is given."""
