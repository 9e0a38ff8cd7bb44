from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard data errors."""


class QueryFailure(DashboardError):
    """The remote store raised or returned no usable response."""

    def __init__(self, table: str, message: str):
        super().__init__(f"{table}: {message}")
        self.table = table


class MappingFailure(DashboardError):
    """A raw row could not be turned into a record."""


class ConfigError(DashboardError):
    pass
