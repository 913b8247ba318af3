"""
CLI module

Command line interface for reading mod metadata and checking for updates.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import click
import toml
import yaml
from loguru import logger

from starmeta import __version__
from starmeta.exceptions import ConfigParseError, StarMetaError
from starmeta.host import (
    LoggerNotifier,
    MemoryAttributeStore,
    find_mod_folders,
    walk_mod_files,
)
from starmeta.logger import setup_logger
from starmeta.models import ModAttribute, StarMetaConfig
from starmeta.services import MetadataReader, UpdateChecker, forum_thread_url


def load_config(config_path: Optional[str]) -> StarMetaConfig:
    """Load a configuration file (TOML, JSON or YAML)"""
    if not config_path:
        return StarMetaConfig()

    path = Path(config_path)
    if not path.exists():
        raise ConfigParseError(f"config file not found: {config_path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            data = toml.load(config_path)
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        else:
            raise ConfigParseError(f"unsupported config format: {suffix}")
    except (toml.TomlDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"cannot parse {config_path}: {e}", context={"path": config_path}
        ) from e

    return StarMetaConfig.from_dict(data)


def mod_key(mods_dir: str, folder: str) -> str:
    """Mod id for a folder: its path below mods_dir, since names can repeat."""
    key = Path(os.path.relpath(folder, os.path.abspath(mods_dir))).as_posix()
    return Path(folder).name if key == "." else key


async def read_async(config: StarMetaConfig, mod_dir: str) -> dict:
    reader = MetadataReader(config, notifier=LoggerNotifier())
    attributes = await reader.read(walk_mod_files(mod_dir))
    return attributes.to_host_dict()


async def check_async(config: StarMetaConfig, mods_dir: str):
    store = MemoryAttributeStore(config.game_id)
    notifier = LoggerNotifier()
    reader = MetadataReader(config, notifier=notifier)

    folders = find_mod_folders(mods_dir)
    logger.info(f"[scan] found {len(folders)} mod folder(s) in {mods_dir}")
    failed = await reader.refresh(
        store, {mod_key(mods_dir, folder): walk_mod_files(folder) for folder in folders}
    )
    if failed:
        logger.warning(f"[scan] skipped {len(failed)} mod(s)")

    mods = store.mods()
    checker = UpdateChecker(store, notifier, config=config)
    results = await checker.check_for_updates(mods)
    return mods, results


@click.group()
@click.option("-c", "--config", "config_path", type=click.Path(), help="config file")
@click.option("--debug", is_flag=True, help="enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], debug: bool):
    """StarMeta - Starsector mod metadata and update checker"""
    try:
        config = load_config(config_path)
    except StarMetaError as e:
        raise click.ClickException(str(e))

    setup_logger(level="DEBUG" if debug else config.logging.level)
    ctx.obj = config


@main.command()
@click.argument("mod_dir", type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def read(config: StarMetaConfig, mod_dir: str):
    """Print the metadata of the mod in MOD_DIR as JSON"""
    try:
        attributes = asyncio.run(read_async(config, mod_dir))
    except StarMetaError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(attributes, indent=2, ensure_ascii=False))


@main.command()
@click.argument("mods_dir", type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def check(config: StarMetaConfig, mods_dir: str):
    """Check every mod under MODS_DIR for updates"""
    try:
        mods, results = asyncio.run(check_async(config, mods_dir))
    except StarMetaError as e:
        raise click.ClickException(str(e))

    by_id = {mod.id: mod for mod in mods}
    updates = [result for result in results if result.has_update]
    for update in updates:
        mod = by_id[update.mod_id]
        name = mod.attr(ModAttribute.MOD_NAME) or mod.id
        click.echo(f"{name}: {update.installed_version} -> {update.online_version}")
        link = forum_thread_url(
            mod.attr(ModAttribute.FORUM_THREAD_ID), config.forum_url
        )
        if link:
            click.echo(f"  {link}")

    click.echo(
        f"{len(updates)} update(s) found, {len(results)} of {len(mods)} mod(s) checked"
    )


if __name__ == "__main__":
    main()
