"""Tests for reading mod metadata from descriptor files."""

import pytest

from starmeta.exceptions import (
    DescriptorError,
    InvalidDescriptor,
    MissingPrimaryDescriptor,
)
from starmeta.host import NotificationType, walk_mod_files
from starmeta.models import ModAttribute, StarMetaConfig, STARSECTOR_FORUM_URL
from starmeta.services.metadata_reader import (
    MetadataReader,
    find_version_file,
    forum_thread_url,
    is_supported,
)

from tests.conftest import write_mod

MOD_INFO = """{
    # Generated by the mod template
    "id": "lw_lazylib",
    "name": "LazyLib",
    "author": "LazyWizard",
    "version": {"major": 2, "minor": 8, "patch": "b"},
    "description": "Library #1 for mods", # not part of the description
    "gameVersion": "0.97a-RC11",
    jars: ["jars/LazyLib.jar",],
}
"""

VERSION_FILE = """{
    "masterVersionFile":"https://raw.githubusercontent.com/LazyWizard/lazylib/master/lazylib.version",
    "modName":"LazyLib",
    "modThreadId":5444,
    "modVersion":
    {
        "major":2,
        "minor":8,
        "patch":"b"
    }
}
"""


@pytest.fixture
def reader(notifier):
    return MetadataReader(notifier=notifier)


class TestRead:

    @pytest.mark.asyncio
    async def test_full_mod(self, tmp_path, reader, notifier):
        folder = write_mod(tmp_path / "LazyLib", MOD_INFO, VERSION_FILE)
        attributes = await reader.read(walk_mod_files(folder))

        assert attributes[ModAttribute.MOD_SHARED_ID] == "lw_lazylib"
        assert attributes[ModAttribute.MOD_VARIANT_ID] == "LazyLib"
        assert attributes[ModAttribute.MOD_NAME] == "LazyLib"
        assert attributes[ModAttribute.AUTHOR] == "LazyWizard"
        assert attributes[ModAttribute.GAME_VERSION] == "0.97a-RC11"
        assert attributes[ModAttribute.DISPLAY_VERSION] == "2.8.b"
        assert attributes[ModAttribute.FORUM_THREAD_ID] == "5444"
        assert attributes[ModAttribute.SOURCE] == STARSECTOR_FORUM_URL
        assert attributes[ModAttribute.LOCAL_VERSION_CHECKER_VERSION] == "2.8.b"
        assert attributes[ModAttribute.ONLINE_VERSION_URL].endswith("lazylib.version")
        assert notifier.history == []

    @pytest.mark.asyncio
    async def test_host_keys(self, tmp_path, reader):
        folder = write_mod(tmp_path / "LazyLib", MOD_INFO)
        host = (await reader.read(walk_mod_files(folder))).to_host_dict()

        assert host["modId"] == "LazyLib"
        assert host["version"] == "2.8.b"
        assert set(host) <= {attribute.value for attribute in ModAttribute}

    @pytest.mark.asyncio
    async def test_without_version_file(self, tmp_path, reader, notifier):
        folder = write_mod(tmp_path / "LazyLib", MOD_INFO)
        attributes = await reader.read(walk_mod_files(folder))

        assert attributes[ModAttribute.MOD_SHARED_ID] == "lw_lazylib"
        assert ModAttribute.FORUM_THREAD_ID not in attributes
        assert ModAttribute.ONLINE_VERSION_URL not in attributes
        assert ModAttribute.SOURCE not in attributes
        assert notifier.history == []

    @pytest.mark.asyncio
    async def test_missing_primary_descriptor(self, tmp_path, reader):
        folder = write_mod(tmp_path / "NoInfo", version_file=VERSION_FILE)
        with pytest.raises(MissingPrimaryDescriptor):
            await reader.read(walk_mod_files(folder))

    @pytest.mark.asyncio
    async def test_empty_file_list(self, reader):
        with pytest.raises(MissingPrimaryDescriptor):
            await reader.read([])

    @pytest.mark.asyncio
    async def test_descriptor_without_id_is_invalid(self, tmp_path, reader):
        folder = write_mod(tmp_path / "NoId", '{"name": "Nameless"}')
        with pytest.raises(InvalidDescriptor):
            await reader.read(walk_mod_files(folder))

    @pytest.mark.asyncio
    async def test_malformed_primary_returns_empty(self, tmp_path, reader, notifier):
        folder = write_mod(tmp_path / "Broken", '{"id": "broken", "name": "oops}', VERSION_FILE)
        attributes = await reader.read(walk_mod_files(folder))

        assert len(attributes) == 0
        assert len(notifier.history) == 1
        assert notifier.history[0].type == NotificationType.WARNING
        assert "mod_info.json" in notifier.history[0].message

    @pytest.mark.asyncio
    async def test_malformed_version_file_keeps_primary(self, tmp_path, reader, notifier):
        folder = write_mod(tmp_path / "LazyLib", MOD_INFO, '{"modThreadId": "oops}')
        attributes = await reader.read(walk_mod_files(folder))

        assert attributes[ModAttribute.MOD_SHARED_ID] == "lw_lazylib"
        assert ModAttribute.FORUM_THREAD_ID not in attributes
        assert len(notifier.history) == 1
        assert "mod.version" in notifier.history[0].message

    @pytest.mark.asyncio
    async def test_missing_optional_fields_are_empty(self, tmp_path, reader):
        folder = write_mod(tmp_path / "Bare", '{"id": "bare"}')
        attributes = await reader.read(walk_mod_files(folder))

        assert attributes[ModAttribute.MOD_NAME] == ""
        assert attributes[ModAttribute.AUTHOR] == ""
        assert attributes[ModAttribute.GAME_VERSION] == ""
        assert ModAttribute.DISPLAY_VERSION not in attributes

    @pytest.mark.asyncio
    async def test_string_version_is_trimmed(self, tmp_path, reader):
        folder = write_mod(tmp_path / "Mod", '{"id": "m", "version": " 1.2.3-RC2 "}')
        attributes = await reader.read(walk_mod_files(folder))
        assert attributes[ModAttribute.DISPLAY_VERSION] == "1.2.3-RC2"

    @pytest.mark.asyncio
    async def test_unusable_version_left_unset(self, tmp_path, reader):
        folder = write_mod(tmp_path / "Mod", '{"id": "m", "version": ["1", "2"]}')
        attributes = await reader.read(walk_mod_files(folder))
        assert ModAttribute.DISPLAY_VERSION not in attributes
        assert attributes[ModAttribute.MOD_SHARED_ID] == "m"

    @pytest.mark.asyncio
    async def test_no_thread_id_means_no_source(self, tmp_path, reader):
        version_file = '{"masterVersionFile": "https://example.com/m.version", "modVersion": "1.0"}'
        folder = write_mod(tmp_path / "Mod", '{"id": "m"}', version_file)
        attributes = await reader.read(walk_mod_files(folder))

        assert ModAttribute.SOURCE not in attributes
        assert ModAttribute.FORUM_THREAD_ID not in attributes
        assert attributes[ModAttribute.ONLINE_VERSION_URL] == "https://example.com/m.version"
        assert attributes[ModAttribute.LOCAL_VERSION_CHECKER_VERSION] == "1.0"

    @pytest.mark.asyncio
    async def test_custom_forum_url(self, tmp_path, notifier):
        config = StarMetaConfig(forum_url="https://forum.example.com/index.php")
        reader = MetadataReader(config, notifier=notifier)
        folder = write_mod(tmp_path / "LazyLib", MOD_INFO, VERSION_FILE)
        attributes = await reader.read(walk_mod_files(folder))
        assert attributes[ModAttribute.SOURCE] == "https://forum.example.com/index.php"


class TestVersionFileSelection:

    def test_first_in_input_order_wins(self):
        files = ["mod/mod_info.json", "mod/b.version", "mod/a.version"]
        assert find_version_file(files) == "mod/b.version"

    def test_exact_extension_only(self):
        files = ["mod/mod_info.json", "mod/notes.version.txt", "mod/version"]
        assert find_version_file(files) is None


class TestRefresh:

    @pytest.mark.asyncio
    async def test_refresh_writes_attributes_and_reports_failures(
        self, tmp_path, reader, store, notifier
    ):
        good = write_mod(tmp_path / "LazyLib", MOD_INFO, VERSION_FILE)
        bad = write_mod(tmp_path / "Broken", version_file=VERSION_FILE)

        failed = await reader.refresh(
            store,
            {"lazylib": walk_mod_files(good), "broken": walk_mod_files(bad)},
        )

        assert failed == ["broken"]
        assert store.get("lazylib", "modSharedId") == "lw_lazylib"
        assert store.get("lazylib", "forumThreadId") == "5444"
        assert store.attributes("broken") == {}
        assert notifier.history[-1].type == NotificationType.WARNING
        assert "broken" in notifier.history[-1].message

    @pytest.mark.asyncio
    async def test_refresh_without_failures_is_silent(self, tmp_path, reader, store, notifier):
        good = write_mod(tmp_path / "LazyLib", MOD_INFO)
        assert await reader.refresh(store, {"lazylib": walk_mod_files(good)}) == []
        assert notifier.history == []


class TestHelpers:

    def test_is_supported(self):
        assert is_supported(["x/mod_info.json", "x/data/a.csv"]) is True
        assert is_supported(["x/data/a.csv"]) is False

    def test_forum_thread_url(self):
        assert (
            forum_thread_url("5444", STARSECTOR_FORUM_URL)
            == "https://fractalsoftworks.com/forum/index.php?topic=5444"
        )
        assert forum_thread_url(5444, STARSECTOR_FORUM_URL).endswith("?topic=5444")
        assert forum_thread_url("", STARSECTOR_FORUM_URL) is None
        assert forum_thread_url(None, STARSECTOR_FORUM_URL) is None


class TestUndecodableFiles:

    @pytest.mark.asyncio
    async def test_undecodable_version_file_keeps_primary(self, tmp_path, reader, notifier):
        folder = write_mod(tmp_path / "LazyLib", MOD_INFO)
        (folder / "m.version").write_bytes(b'{"modThreadId": "\xff\xfe12"}')

        attributes = await reader.read(walk_mod_files(folder))

        assert attributes[ModAttribute.MOD_SHARED_ID] == "lw_lazylib"
        assert ModAttribute.FORUM_THREAD_ID not in attributes
        assert len(notifier.history) == 1
        assert notifier.history[0].type == NotificationType.WARNING
        assert "m.version" in notifier.history[0].message

    @pytest.mark.asyncio
    async def test_undecodable_mod_info_is_descriptor_error(self, tmp_path, reader):
        folder = tmp_path / "Binary"
        folder.mkdir()
        (folder / "mod_info.json").write_bytes(b'{"id": "\xff"}')

        with pytest.raises(DescriptorError) as exc_info:
            await reader.read(walk_mod_files(folder))
        assert exc_info.value.path.endswith("mod_info.json")

    @pytest.mark.asyncio
    async def test_refresh_collects_undecodable_mod(self, tmp_path, reader, store):
        bad = tmp_path / "Binary"
        bad.mkdir()
        (bad / "mod_info.json").write_bytes(b'{"id": "\xff"}')
        good = write_mod(tmp_path / "LazyLib", MOD_INFO)

        failed = await reader.refresh(
            store, {"b": walk_mod_files(bad), "g": walk_mod_files(good)}
        )

        assert failed == ["b"]
        assert store.get("g", "modSharedId") == "lw_lazylib"
