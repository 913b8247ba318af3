"""
Host collaborator interfaces

The host application owns attribute persistence, user notifications,
file access and HTTP. StarMeta components receive implementations of
these interfaces instead of reaching for global host objects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class AttributeStore(ABC):
    """Persistent per-mod attribute storage"""

    @abstractmethod
    def get(self, mod_id: str, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set(self, game_id: str, mod_id: str, key: str, value: Any) -> None:
        pass


class NotificationType(Enum):
    ACTIVITY = "activity"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A user facing notification"""

    message: str
    type: NotificationType = NotificationType.WARNING
    id: Optional[str] = None
    progress: Optional[float] = None  # percent, activity notifications only


class NotificationChannel(ABC):
    """User notification surface"""

    @abstractmethod
    def post(self, notification: Notification) -> None:
        """Show a notification, replacing any with the same id."""
        pass

    @abstractmethod
    def dismiss(self, notification_id: str) -> None:
        pass


class FileReader(ABC):
    """Read-only file access"""

    @abstractmethod
    async def read_text(self, path: str) -> str:
        """
        Read a whole file as UTF-8 text

        Raises:
            OSError: the file cannot be read
        """
        pass


class HttpClient(ABC):
    """HTTP GET access for remote version files"""

    @abstractmethod
    async def get_text(self, url: str) -> str:
        """
        Fetch ``url`` and return the response body

        Raises:
            FetchFailure: network error, timeout or non-2xx status
        """
        pass
