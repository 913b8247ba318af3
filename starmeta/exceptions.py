"""
StarMeta exception hierarchy

Layered exceptions carrying an error code, context information and a
dict form for logging or JSON output.
"""

from typing import Any, Dict, Optional


class StarMetaError(Exception):
    """Base class for all StarMeta errors"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(StarMetaError):
    """Configuration error"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """Configuration file could not be read or parsed"""

    def _get_default_code(self) -> str:
        return "E101"


class ConfigValidationError(ConfigError):
    """Configuration value out of range or of the wrong type"""

    def _get_default_code(self) -> str:
        return "E102"


class DescriptorError(StarMetaError):
    """Problem with a mod descriptor file"""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, context)
        self.path = path
        if path:
            self.context["path"] = path

    def _get_default_code(self) -> str:
        return "E200"


class MalformedDescriptor(DescriptorError):
    """Descriptor text is not parseable as relaxed JSON"""

    def _get_default_code(self) -> str:
        return "E201"


class MissingPrimaryDescriptor(DescriptorError):
    """No mod_info.json among the mod's files"""

    def _get_default_code(self) -> str:
        return "E202"


class InvalidDescriptor(DescriptorError):
    """Descriptor parsed but is not a valid mod (e.g. no id)"""

    def _get_default_code(self) -> str:
        return "E203"


class FetchFailure(StarMetaError):
    """Remote version file could not be retrieved or parsed"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, code, context)
        self.url = url
        self.status = status
        if url is not None:
            self.context["url"] = url
        if status is not None:
            self.context["status_code"] = status

    def _get_default_code(self) -> str:
        return "E300"


__all__ = [
    "StarMetaError",
    # config
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    # descriptors
    "DescriptorError",
    "MalformedDescriptor",
    "MissingPrimaryDescriptor",
    "InvalidDescriptor",
    # network
    "FetchFailure",
]
