"""
Remote version file client

Fetches ``.version`` files from the URLs mods publish in
``masterVersionFile``.
"""

import asyncio
from typing import Optional

import aiohttp

from starmeta.exceptions import FetchFailure, MalformedDescriptor
from starmeta.host.base import HttpClient
from starmeta.models import HttpConfig, VersionDescriptor
from starmeta.services.descriptor_parser import parse_descriptor


class VersionFileClient(HttpClient):
    """aiohttp backed HTTP client"""

    def __init__(
        self,
        config: Optional[HttpConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or HttpConfig()
        self._session = session
        self._owned_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
        return self._session

    async def get_text(self, url: str) -> str:
        if not url:
            raise FetchFailure("no version file url", url=url)

        try:
            async with self.session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FetchFailure(
                        f"request failed (status {response.status})",
                        url=url,
                        status=response.status,
                    )
                # raw files are often served as text/plain with no charset
                return await response.text(encoding="utf-8", errors="replace")
        except asyncio.TimeoutError as e:
            raise FetchFailure(
                f"timed out after {self.config.timeout}s", url=url
            ) from e
        except aiohttp.ClientError as e:
            raise FetchFailure(f"network error: {e}", url=url) from e

    async def close(self):
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def fetch_version_descriptor(client: HttpClient, url: str) -> VersionDescriptor:
    """
    Fetch and parse a remote version file

    Raises:
        FetchFailure: the file could not be fetched or parsed
    """
    text = await client.get_text(url)
    try:
        return VersionDescriptor.from_mapping(parse_descriptor(text, url))
    except MalformedDescriptor as e:
        raise FetchFailure(e.message, url=url) from e
