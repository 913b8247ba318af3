"""
Version data models

A mod version is either a free-form string ("0.65.2a-RC1") or a
{major, minor, patch} object. Both collapse to a single dotted string
before they are compared or stored.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Version:
    """Decomposed version triple, each component optional"""

    major: Optional[str] = None
    minor: Optional[str] = None
    patch: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Version":
        """Build from a descriptor's {major, minor, patch} object."""

        def component(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            major=component("major"),
            minor=component("minor"),
            patch=component("patch"),
        )

    def __str__(self) -> str:
        parts = [p for p in (self.major, self.minor, self.patch) if p is not None]
        return ".".join(parts)


VersionValue = Union[str, Version, Mapping, None]


def normalize_version(value: Any) -> str:
    """
    Collapse a version value into its dotted string form

    Strings are returned trimmed, triples are joined with ``.`` skipping
    absent components, ``None`` becomes the empty string.

    Raises:
        TypeError: the value is neither a string nor a version object
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Version):
        return str(value)
    if isinstance(value, Mapping):
        return str(Version.from_mapping(value))
    raise TypeError(f"unsupported version value: {value!r}")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class VersionDescriptor:
    """Contents of a local or remote ``.version`` file"""

    master_version_file_url: str
    mod_name: str
    mod_thread_id: str
    mod_version: VersionValue

    @classmethod
    def from_mapping(cls, data: Mapping) -> "VersionDescriptor":
        mod_version = data.get("modVersion")
        if isinstance(mod_version, Mapping):
            mod_version = Version.from_mapping(mod_version)

        return cls(
            master_version_file_url=_text(data.get("masterVersionFile")),
            mod_name=_text(data.get("modName")),
            mod_thread_id=_text(data.get("modThreadId")),
            mod_version=mod_version,
        )

    @property
    def version_string(self) -> str:
        """Normalized ``modVersion``; raises TypeError for unusable values."""
        return normalize_version(self.mod_version)
