"""Shared services."""

from .data_store import DataStore

__all__ = ["DataStore"]
