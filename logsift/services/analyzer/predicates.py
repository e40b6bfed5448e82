"""Eligibility checks deciding what goes to the analyzer index.

All predicates are total: a missing object or a missing optional field makes
the object unsuitable instead of raising.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from logsift.domain.enums import LaunchMode, LogLevel, StatusEnum, TestItemIssueGroup

if TYPE_CHECKING:
    from logsift.domain.items.models import TestItem
    from logsift.domain.launches.models import Launch
    from logsift.domain.logs.models import Log


# Issue groups whose items are never indexed
EXCLUDED_ISSUE_GROUPS: frozenset[TestItemIssueGroup] = frozenset({TestItemIssueGroup.TO_INVESTIGATE})


def launch_can_be_indexed(launch: "Launch | None") -> bool:
    """A launch qualifies when it is a finished, non-debug run."""
    if launch is None or launch.status is None:
        return False
    if launch.mode is not None and launch.mode != LaunchMode.DEFAULT:
        return False
    return launch.status != StatusEnum.IN_PROGRESS


def item_can_be_indexed(item: "TestItem | None") -> bool:
    """An item qualifies when it carries an issue classification outside the excluded groups.

    Retries and items explicitly hidden from the analyzer never qualify.
    """
    if item is None or item.retry_of is not None or item.ignore_analyzer:
        return False
    group = TestItemIssueGroup.from_locator(item.issue_type)
    return group is not None and group not in EXCLUDED_ISSUE_GROUPS


def log_is_suitable(log: "Log | None") -> bool:
    """A log qualifies when its level is ERROR or worse."""
    return log is not None and log.log_level is not None and log.log_level >= LogLevel.ERROR
