"""
Mod attribute models

The host keeps a flat key/value attribute set per installed mod. Only the
keys enumerated in ``ModAttribute`` are ever produced here.
"""

from collections.abc import MutableMapping
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional


class ModAttribute(Enum):
    """Attribute keys, valued with the key name the host stores them under"""

    MOD_SHARED_ID = "modSharedId"
    MOD_VARIANT_ID = "modId"
    MOD_NAME = "modName"
    AUTHOR = "author"
    FILE_NAME = "fileName"
    SOURCE = "source"
    FORUM_THREAD_ID = "forumThreadId"
    DISPLAY_VERSION = "version"
    LOCAL_VERSION_CHECKER_VERSION = "localVersionCheckerVersion"
    ONLINE_VERSION_URL = "onlineVersionUrl"
    ONLINE_VERSION_CHECKER_VERSION = "onlineVersionCheckerVersion"
    GAME_VERSION = "gameVersion"
    LAST_UPDATE_TIME = "lastUpdateTime"
    ONLINE_VERSION = "onlineVersion"

    @classmethod
    def from_key(cls, key: str) -> Optional["ModAttribute"]:
        """Look up by host key; ``None`` for keys outside the set."""
        try:
            return cls(key)
        except ValueError:
            return None


class ModAttributes(MutableMapping):
    """
    Attribute mapping for one mod installation

    Keys must be ``ModAttribute`` members. A missing key means "unknown";
    ``get`` returns an empty string for it unless told otherwise.
    """

    def __init__(self, values: Optional[Mapping[ModAttribute, Any]] = None):
        self._values: Dict[ModAttribute, Any] = {}
        if values:
            self.update(values)

    def __getitem__(self, key: ModAttribute) -> Any:
        return self._values[key]

    def __setitem__(self, key: ModAttribute, value: Any) -> None:
        if not isinstance(key, ModAttribute):
            raise KeyError(f"unknown mod attribute: {key!r}")
        self._values[key] = value

    def __delitem__(self, key: ModAttribute) -> None:
        del self._values[key]

    def __iter__(self) -> Iterator[ModAttribute]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ModAttributes({self.to_host_dict()!r})"

    def get(self, key: ModAttribute, default: Any = "") -> Any:
        return self._values.get(key, default)

    def to_host_dict(self) -> Dict[str, Any]:
        """Mapping keyed by the host's attribute names."""
        return {key.value: value for key, value in self._values.items()}

    @classmethod
    def from_host_dict(cls, data: Mapping[str, Any]) -> "ModAttributes":
        """Build from host-keyed data, dropping keys outside the set."""
        attributes = cls()
        for key, value in data.items():
            attribute = ModAttribute.from_key(key)
            if attribute is not None:
                attributes[attribute] = value
        return attributes
