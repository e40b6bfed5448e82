"""Request and response bodies of the index endpoints."""
from __future__ import annotations

import msgspec


class IndexLaunchesRequest(msgspec.Struct, rename="camel", kw_only=True):
    """Launches whose logs should be indexed."""

    launch_ids: list[int]


class IndexItemsRequest(msgspec.Struct, rename="camel", kw_only=True):
    """Specific items of one launch whose logs should be indexed."""

    launch_id: int
    item_ids: list[int]


class CleanIndexBody(msgspec.Struct, rename="camel", kw_only=True):
    """Log ids to remove from the project's index."""

    ids: list[int]


class IndexResult(msgspec.Struct, rename="camel", kw_only=True):
    project_id: int
    indexed: int


class CleanIndexAccepted(msgspec.Struct, rename="camel", kw_only=True):
    project_id: int
    scheduled: int


class IndexingStatus(msgspec.Struct, rename="camel", kw_only=True):
    project_id: int
    indexing: bool
