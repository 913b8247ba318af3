"""
Configuration models
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from starmeta import __version__
from starmeta.exceptions import ConfigValidationError

STARSECTOR_FORUM_URL = "https://fractalsoftworks.com/forum/index.php"


@dataclass
class HttpConfig:
    """Remote version file fetching"""

    timeout: float = 15.0
    max_concurrent: int = 8
    user_agent: str = f"starmeta/{__version__}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HttpConfig":
        config = cls(
            timeout=_number(data, "timeout", cls.timeout, float),
            max_concurrent=_number(data, "max_concurrent", cls.max_concurrent, int),
            user_agent=str(data.get("user_agent", cls.user_agent)),
        )
        if config.timeout <= 0:
            raise ConfigValidationError(
                "http.timeout must be positive", context={"timeout": config.timeout}
            )
        if config.max_concurrent <= 0:
            raise ConfigValidationError(
                "http.max_concurrent must be positive",
                context={"max_concurrent": config.max_concurrent},
            )
        return config


@dataclass
class NotificationConfig:
    progress_id: str = "starsector-check-update-progress"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationConfig":
        return cls(progress_id=str(data.get("progress_id", cls.progress_id)))


@dataclass
class LoggingConfig:
    level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        level = str(data.get("level", cls.level)).upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"):
            raise ConfigValidationError(
                f"unknown log level: {level}", context={"level": level}
            )
        return cls(level=level)


@dataclass
class StarMetaConfig:
    """Top level configuration"""

    game_id: str = "starsector"
    forum_url: str = STARSECTOR_FORUM_URL
    http: HttpConfig = field(default_factory=HttpConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StarMetaConfig":
        if not isinstance(data, dict):
            raise ConfigValidationError("configuration root must be a table")
        return cls(
            game_id=str(data.get("game_id", cls.game_id)),
            forum_url=str(data.get("forum_url", cls.forum_url)),
            http=HttpConfig.from_dict(_section(data, "http")),
            notifications=NotificationConfig.from_dict(
                _section(data, "notifications")
            ),
            logging=LoggingConfig.from_dict(_section(data, "logging")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(
            f"[{name}] must be a table", context={"section": name}
        )
    return section


def _number(data: Dict[str, Any], key: str, default, kind):
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigValidationError(f"{key} must be a number", context={key: value})
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigValidationError(f"{key} must be a number", context={key: value})
