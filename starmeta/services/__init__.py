"""
StarMeta service layer

Descriptor parsing, metadata reading, version comparison and update checks.
"""

from starmeta.services.descriptor_parser import parse_descriptor, strip_comments
from starmeta.services.version_comparator import is_newer, split_release
from starmeta.services.metadata_reader import (
    MetadataReader,
    forum_thread_url,
    is_supported,
)
from starmeta.services.api_client import VersionFileClient, fetch_version_descriptor
from starmeta.services.update_checker import UpdateChecker

__all__ = [
    "parse_descriptor",
    "strip_comments",
    "is_newer",
    "split_release",
    "MetadataReader",
    "forum_thread_url",
    "is_supported",
    "VersionFileClient",
    "fetch_version_descriptor",
    "UpdateChecker",
]
