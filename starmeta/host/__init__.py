"""
Host collaborators

Interfaces for what the host application provides, plus local
implementations for use without a host.
"""

from starmeta.host.base import (
    AttributeStore,
    Notification,
    NotificationType,
    NotificationChannel,
    FileReader,
    HttpClient,
)
from starmeta.host.memory import MemoryAttributeStore, LoggerNotifier
from starmeta.host.filesystem import AsyncFileReader, walk_mod_files, find_mod_folders

__all__ = [
    "AttributeStore",
    "Notification",
    "NotificationType",
    "NotificationChannel",
    "FileReader",
    "HttpClient",
    "MemoryAttributeStore",
    "LoggerNotifier",
    "AsyncFileReader",
    "walk_mod_files",
    "find_mod_folders",
]
