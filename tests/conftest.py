"""Shared fixtures and fake host collaborators."""

import asyncio
import os
from typing import Dict, List, Union

import pytest

from starmeta.exceptions import FetchFailure
from starmeta.host import HttpClient, LoggerNotifier, MemoryAttributeStore


class FakeHttpClient(HttpClient):
    """Serves canned bodies; FetchFailure for unknown urls or error entries."""

    def __init__(self, responses: Dict[str, Union[str, Exception]], delay: float = 0):
        self.responses = responses
        self.delay = delay
        self.requested: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_text(self, url: str) -> str:
        self.requested.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            response = self.responses.get(url)
            if response is None:
                raise FetchFailure("not found", url=url, status=404)
            if isinstance(response, Exception):
                raise response
            return response
        finally:
            self.in_flight -= 1

    async def close(self):
        pass


def write_mod(folder, mod_info=None, version_file=None, version_name="mod.version"):
    """Create a mod folder with the given descriptor texts."""
    os.makedirs(folder, exist_ok=True)
    if mod_info is not None:
        (folder / "mod_info.json").write_text(mod_info, encoding="utf-8")
    if version_file is not None:
        data_dir = folder / "data" / "config"
        os.makedirs(data_dir, exist_ok=True)
        (data_dir / version_name).write_text(version_file, encoding="utf-8")
    return folder


@pytest.fixture
def notifier():
    return LoggerNotifier()


@pytest.fixture
def store():
    return MemoryAttributeStore()
