"""
Local filesystem access
"""

import os
from typing import List

import aiofiles

from starmeta.constants import MOD_INFO_FILE
from starmeta.host.base import FileReader


class AsyncFileReader(FileReader):
    """Reads descriptor files with aiofiles"""

    async def read_text(self, path: str) -> str:
        async with aiofiles.open(path, "r", encoding="utf-8-sig") as f:
            return await f.read()


def walk_mod_files(folder: str) -> List[str]:
    """Absolute paths of every file below ``folder``, in walk order."""
    files = []
    for root, dirs, names in os.walk(folder):
        dirs.sort()
        for name in sorted(names):
            files.append(os.path.abspath(os.path.join(root, name)))
    return files


def find_mod_folders(mods_dir: str) -> List[str]:
    """Folders below ``mods_dir`` that contain a mod_info.json."""
    folders = []
    for root, dirs, names in os.walk(mods_dir):
        dirs.sort()
        if MOD_INFO_FILE in names:
            folders.append(os.path.abspath(root))
            # a mod's own subfolders are not separate mods
            dirs[:] = []
    return folders
