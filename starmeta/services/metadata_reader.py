"""
Mod metadata reader

Builds a mod's attribute mapping from the descriptor files in its
install folder:

- ``mod_info.json`` (required) gives id, name, author, version and game
  version.
- a ``*.version`` file (optional) gives the forum thread and the remote
  version file used for update checks.
"""

import os
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

from loguru import logger

from starmeta.constants import MOD_INFO_FILE, VERSION_CHECKER_FILE_EXT
from starmeta.exceptions import (
    DescriptorError,
    InvalidDescriptor,
    MalformedDescriptor,
    MissingPrimaryDescriptor,
)
from starmeta.host.base import (
    AttributeStore,
    FileReader,
    Notification,
    NotificationChannel,
    NotificationType,
)
from starmeta.host.filesystem import AsyncFileReader
from starmeta.models import (
    ModAttribute,
    ModAttributes,
    StarMetaConfig,
    VersionDescriptor,
    normalize_version,
)
from starmeta.services.descriptor_parser import parse_descriptor


def is_supported(files: Sequence[str]) -> bool:
    """Whether the files look like an installable mod."""
    return find_primary_descriptor(files) is not None


def find_primary_descriptor(files: Sequence[str]) -> Optional[str]:
    for file in files:
        if os.path.basename(file) == MOD_INFO_FILE:
            return file
    return None


def find_version_file(files: Sequence[str]) -> Optional[str]:
    """
    First ``*.version`` file in input order

    Mods are expected to ship at most one. When several exist the choice
    is arbitrary.
    """
    for file in files:
        if os.path.splitext(file)[1] == VERSION_CHECKER_FILE_EXT:
            return file
    return None


def forum_thread_url(thread_id: Any, forum_url: str) -> Optional[str]:
    """Forum page for a mod thread, or None without a thread id."""
    if thread_id is None or str(thread_id).strip() == "":
        return None
    return f"{forum_url}?topic={str(thread_id).strip()}"


def _text(data: Mapping, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value).strip()


class MetadataReader:
    """Reads descriptor files into ``ModAttributes``"""

    def __init__(
        self,
        config: Optional[StarMetaConfig] = None,
        file_reader: Optional[FileReader] = None,
        notifier: Optional[NotificationChannel] = None,
    ):
        self.config = config or StarMetaConfig()
        self.file_reader = file_reader or AsyncFileReader()
        self.notifier = notifier

    async def read(self, files: Sequence[str]) -> ModAttributes:
        """
        Read metadata for one mod

        Args:
            files: every file path of the mod's install tree

        Returns:
            The attribute mapping. Parts that could not be read are left
            unset.

        Raises:
            MissingPrimaryDescriptor: no mod_info.json among ``files``
            InvalidDescriptor: mod_info.json has no id
            DescriptorError: mod_info.json exists but cannot be read
        """
        attributes = ModAttributes()

        mod_info_file = find_primary_descriptor(files)
        if mod_info_file is None:
            raise MissingPrimaryDescriptor(
                f"{MOD_INFO_FILE} not found in a folder. "
                "The mod may be incorrectly packaged"
            )

        try:
            raw = await self.file_reader.read_text(mod_info_file)
        except (OSError, UnicodeDecodeError) as e:
            raise DescriptorError(
                f"cannot read {mod_info_file}: {e}", path=mod_info_file
            ) from e

        try:
            mod_info = parse_descriptor(raw, mod_info_file)
        except MalformedDescriptor as e:
            self._warn(e)
            return attributes

        self._apply_mod_info(attributes, mod_info, mod_info_file)

        version_file = find_version_file(files)
        if version_file is None:
            logger.debug(f"[metadata] no version file for {mod_info.get('id')}")
            return attributes

        logger.info(f"[metadata] found version checker file: {version_file}")
        try:
            raw = await self.file_reader.read_text(version_file)
            version_info = parse_descriptor(raw, version_file)
        except (OSError, UnicodeDecodeError) as e:
            self._warn(
                MalformedDescriptor(f"cannot read {version_file}: {e}", path=version_file)
            )
            return attributes
        except MalformedDescriptor as e:
            self._warn(e)
            return attributes

        self._apply_version_file(attributes, VersionDescriptor.from_mapping(version_info))
        return attributes

    def _apply_mod_info(
        self, attributes: ModAttributes, mod_info: Mapping, path: str
    ) -> None:
        if mod_info.get("id") is None:
            raise InvalidDescriptor(
                f"Missing, invalid or unsupported {MOD_INFO_FILE}", path=path
            )

        # Archive names often carry "beta"/"RC" tags the metadata lacks,
        # so only the version reported by the game is stored here.
        version = mod_info.get("version")
        if version is not None:
            try:
                attributes[ModAttribute.DISPLAY_VERSION] = normalize_version(version)
            except (TypeError, ValueError) as e:
                logger.debug(f"[metadata] unusable version in {path}: {e}")

        name = _text(mod_info, "name")
        attributes[ModAttribute.MOD_SHARED_ID] = _text(mod_info, "id")
        attributes[ModAttribute.MOD_VARIANT_ID] = name
        attributes[ModAttribute.MOD_NAME] = name
        attributes[ModAttribute.AUTHOR] = _text(mod_info, "author")
        attributes[ModAttribute.GAME_VERSION] = _text(mod_info, "gameVersion")

    def _apply_version_file(
        self, attributes: ModAttributes, descriptor: VersionDescriptor
    ) -> None:
        if descriptor.mod_thread_id:
            attributes[ModAttribute.FORUM_THREAD_ID] = descriptor.mod_thread_id
            # tells the host the mod has a browsable source page
            attributes[ModAttribute.SOURCE] = self.config.forum_url

        if descriptor.mod_version is not None:
            try:
                attributes[ModAttribute.LOCAL_VERSION_CHECKER_VERSION] = (
                    descriptor.version_string
                )
            except (TypeError, ValueError) as e:
                logger.debug(f"[metadata] unusable modVersion: {e}")

        if descriptor.master_version_file_url:
            attributes[ModAttribute.ONLINE_VERSION_URL] = (
                descriptor.master_version_file_url
            )

    async def refresh(
        self,
        store: AttributeStore,
        mods_files: Mapping[str, Sequence[str]],
    ) -> List[str]:
        """
        Re-read metadata for installed mods and write it to ``store``

        Mods whose descriptors are missing or invalid are skipped and
        reported together in one warning.

        Args:
            store: attribute store to update
            mods_files: mod id -> that mod's file paths

        Returns:
            ids of mods that could not be refreshed
        """
        failed: List[str] = []
        for mod_id, files in mods_files.items():
            try:
                attributes = await self.read(files)
            except DescriptorError as e:
                logger.warning(f"[metadata] refresh failed for {mod_id}: {e}")
                failed.append(mod_id)
                continue

            for key, value in attributes.to_host_dict().items():
                store.set(self.config.game_id, mod_id, key, value)

        if failed and self.notifier:
            self.notifier.post(
                Notification(
                    message="Failed to refresh metadata for: " + ", ".join(failed),
                    type=NotificationType.WARNING,
                )
            )
        return failed

    def _warn(self, error: DescriptorError) -> None:
        logger.warning(f"[metadata] {error.message}")
        if self.notifier:
            self.notifier.post(
                Notification(message=error.message, type=NotificationType.WARNING)
            )
