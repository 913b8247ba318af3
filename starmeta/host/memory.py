"""
In-process collaborator implementations

Used by the command line tool and in tests where no host application
is present.
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from starmeta.constants import GAME_ID
from starmeta.host.base import (
    AttributeStore,
    Notification,
    NotificationChannel,
    NotificationType,
)
from starmeta.models import InstalledMod, ModAttributes


class MemoryAttributeStore(AttributeStore):
    """Attribute store backed by nested dicts: game -> mod -> key -> value"""

    def __init__(self, game_id: str = GAME_ID):
        self.game_id = game_id
        self._games: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def get(
        self,
        mod_id: str,
        key: str,
        default: Any = None,
        game_id: Optional[str] = None,
    ) -> Any:
        mods = self._games.get(game_id or self.game_id, {})
        return mods.get(mod_id, {}).get(key, default)

    def set(self, game_id: str, mod_id: str, key: str, value: Any) -> None:
        self._games.setdefault(game_id, {}).setdefault(mod_id, {})[key] = value

    def attributes(self, mod_id: str, game_id: Optional[str] = None) -> Dict[str, Any]:
        """Raw stored attributes, including host-only keys."""
        mods = self._games.get(game_id or self.game_id, {})
        return dict(mods.get(mod_id, {}))

    def mods(self, game_id: Optional[str] = None) -> List[InstalledMod]:
        mods = self._games.get(game_id or self.game_id, {})
        return [
            InstalledMod(id=mod_id, attributes=ModAttributes.from_host_dict(values))
            for mod_id, values in mods.items()
        ]


class LoggerNotifier(NotificationChannel):
    """Notification channel that writes to the log and keeps a history"""

    def __init__(self):
        self.history: List[Notification] = []
        self.active: Dict[str, Notification] = {}

    def post(self, notification: Notification) -> None:
        self.history.append(notification)
        if notification.id:
            self.active[notification.id] = notification

        if notification.type == NotificationType.ACTIVITY:
            logger.debug(
                f"[notify] {notification.message} ({notification.progress or 0:.0f}%)"
            )
        elif notification.type == NotificationType.SUCCESS:
            logger.success(f"[notify] {notification.message}")
        elif notification.type == NotificationType.WARNING:
            logger.warning(f"[notify] {notification.message}")
        else:
            logger.error(f"[notify] {notification.message}")

    def dismiss(self, notification_id: str) -> None:
        self.active.pop(notification_id, None)
