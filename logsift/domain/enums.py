"""Enumerations shared by the domain models and the analyzer services."""
from __future__ import annotations

from enum import Enum, IntEnum


class LogLevel(IntEnum):
    """Log severities, ordered so that comparisons follow severity."""

    TRACE = 5000
    DEBUG = 10000
    INFO = 20000
    WARN = 30000
    ERROR = 40000
    FATAL = 50000
    UNKNOWN = 60000


class StatusEnum(str, Enum):
    """Execution status of a launch or test item."""

    IN_PROGRESS = "IN_PROGRESS"
    PASSED = "PASSED"
    FAILED = "FAILED"
    STOPPED = "STOPPED"
    SKIPPED = "SKIPPED"
    INTERRUPTED = "INTERRUPTED"
    CANCELLED = "CANCELLED"
    INFO = "INFO"
    WARN = "WARN"


class LaunchMode(str, Enum):
    """Launches started in DEBUG mode are invisible to the analyzer."""

    DEFAULT = "DEFAULT"
    DEBUG = "DEBUG"


class TestItemIssueGroup(str, Enum):
    """Top level issue groups with their default locators.

    Custom issue sub-types carry a locator starting with the group's
    two-letter prefix, e.g. ``pb_1h2k`` belongs to PRODUCT_BUG.
    """

    __test__ = False

    PRODUCT_BUG = "pb001"
    AUTOMATION_BUG = "ab001"
    SYSTEM_ISSUE = "si001"
    NO_DEFECT = "nd001"
    TO_INVESTIGATE = "ti001"

    @property
    def locator(self) -> str:
        return self.value

    @property
    def prefix(self) -> str:
        return self.value[:2]

    @classmethod
    def from_locator(cls, locator: str | None) -> "TestItemIssueGroup | None":
        """Return the group a locator belongs to, or None when unknown."""
        if not locator:
            return None
        prefix = locator.strip().lower()[:2]
        for group in cls:
            if group.prefix == prefix:
                return group
        return None
