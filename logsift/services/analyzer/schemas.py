"""Index request schemas exchanged with the analyzer service.

Field names go over the wire in camelCase, the project id as ``project``.
"""
from __future__ import annotations

import msgspec

from logsift.config.settings import AnalyzerSettings


class AnalyzerConfig(msgspec.Struct, rename="camel", kw_only=True):
    """Analyzer tuning sent along with every indexed launch."""

    min_should_match: int = 80
    min_doc_freq: int = 7
    min_term_freq: int = 1
    number_of_log_lines: int = -1
    is_auto_analyzer_enabled: bool = True
    analyzer_mode: str = "LAUNCH_NAME"
    indexing_running: bool = False

    @classmethod
    def from_settings(cls, settings: AnalyzerSettings) -> "AnalyzerConfig":
        return cls(
            min_should_match=settings.min_should_match,
            min_doc_freq=settings.min_doc_freq,
            min_term_freq=settings.min_term_freq,
            number_of_log_lines=settings.number_of_log_lines,
            is_auto_analyzer_enabled=settings.auto_analyzer_enabled,
            analyzer_mode=settings.analyzer_mode,
        )


class IndexLog(msgspec.Struct, rename="camel", kw_only=True):
    """A single ERROR-or-worse log of an indexed test item."""

    log_id: int
    log_level: int
    message: str


class IndexTestItem(msgspec.Struct, rename="camel", kw_only=True):
    """A classified test item with its qualifying logs."""

    __test__ = False

    test_item_id: int
    unique_id: str | None = None
    issue_type: str | None = None
    is_auto_analyzed: bool = False
    logs: list[IndexLog] = msgspec.field(default_factory=list)


class IndexLaunch(msgspec.Struct, rename="camel", kw_only=True):
    """Top level index request entry: one launch and its items."""

    launch_id: int
    launch_name: str
    project_id: int = msgspec.field(name="project")
    analyzer_config: AnalyzerConfig | None = None
    test_items: list[IndexTestItem] = msgspec.field(default_factory=list)


class IndexResponse(msgspec.Struct, kw_only=True):
    """Bulk indexing result reported by the analyzer."""

    took: int = 0
    errors: bool = False
    items: list[dict] = msgspec.field(default_factory=list)


class CleanIndexRequest(msgspec.Struct, kw_only=True):
    """Removal of specific log documents from a project's index."""

    project: int
    ids: list[int]
