"""Attachment binary storage."""
from .datastore import LocalDataStore

__all__ = ["LocalDataStore"]
