"""
StarMeta data models

Version values, attribute mappings, update check results and configuration.
"""

from starmeta.models.version import (
    Version,
    VersionDescriptor,
    normalize_version,
)
from starmeta.models.attributes import (
    ModAttribute,
    ModAttributes,
)
from starmeta.models.mod import (
    InstalledMod,
    UpdateResult,
    EventKind,
    UpdateEvent,
)
from starmeta.models.config import (
    STARSECTOR_FORUM_URL,
    HttpConfig,
    NotificationConfig,
    LoggingConfig,
    StarMetaConfig,
)

__all__ = [
    # versions
    "Version",
    "VersionDescriptor",
    "normalize_version",
    # attributes
    "ModAttribute",
    "ModAttributes",
    # update check
    "InstalledMod",
    "UpdateResult",
    "EventKind",
    "UpdateEvent",
    # config
    "STARSECTOR_FORUM_URL",
    "HttpConfig",
    "NotificationConfig",
    "LoggingConfig",
    "StarMetaConfig",
]
