"""
StarMeta

Metadata extraction and update checking for locally installed Starsector mods.
"""

__version__ = "0.1.0"

from starmeta.exceptions import StarMetaError
from starmeta.models import ModAttribute, ModAttributes, StarMetaConfig
from starmeta.services import (
    MetadataReader,
    UpdateChecker,
    is_newer,
    parse_descriptor,
)

__all__ = [
    "__version__",
    "StarMetaError",
    "ModAttribute",
    "ModAttributes",
    "StarMetaConfig",
    "MetadataReader",
    "UpdateChecker",
    "is_newer",
    "parse_descriptor",
]
