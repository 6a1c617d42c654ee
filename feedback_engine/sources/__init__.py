"""Pluggable connectors that load contact messages from the message store."""

from .admin_api import AdminApiSource
from .base import MessageSource
from .json_file import JsonFileSource

__all__ = ["AdminApiSource", "JsonFileSource", "MessageSource"]
