"""
Installed mod and update check models
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Tuple

from starmeta.models.attributes import ModAttribute, ModAttributes


@dataclass
class InstalledMod:
    """A mod known to the host, with its stored attributes"""

    id: str
    attributes: ModAttributes = field(default_factory=ModAttributes)

    def attr(self, key: ModAttribute, default: Any = "") -> Any:
        return self.attributes.get(key, default)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one mod's update check"""

    mod_id: str
    installed_version: str
    online_version: str
    has_update: bool
    checked_at: datetime


class EventKind(Enum):
    """Update check event type"""

    PROGRESS = "progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class UpdateEvent:
    """
    Event emitted while an update check runs

    ``PROGRESS`` events report ``completed`` out of ``total`` fetches.
    The single ``COMPLETE`` event carries the updates found and the ids
    of updated mods that have a browsable source page.
    """

    kind: EventKind
    completed: int
    total: int
    updates: Tuple[UpdateResult, ...] = ()
    browsable: Tuple[str, ...] = ()

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 100.0
        return self.completed * 100 / self.total
