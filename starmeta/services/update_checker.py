"""
Mod update checker

Fetches every mod's remote version file concurrently, compares it with
the installed version and records the mods that have updates.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from starmeta.constants import NEWEST_FILE_ID, UNKNOWN_FILE_ID
from starmeta.exceptions import FetchFailure
from starmeta.host.base import (
    AttributeStore,
    HttpClient,
    Notification,
    NotificationChannel,
    NotificationType,
)
from starmeta.models import (
    EventKind,
    InstalledMod,
    ModAttribute,
    StarMetaConfig,
    UpdateEvent,
    UpdateResult,
    VersionDescriptor,
)
from starmeta.services.api_client import VersionFileClient, fetch_version_descriptor
from starmeta.services.version_comparator import is_newer

EventCallback = Callable[[UpdateEvent], None]


class UpdateChecker:
    """Checks installed mods for newer published versions"""

    def __init__(
        self,
        store: AttributeStore,
        notifier: NotificationChannel,
        http_client: Optional[HttpClient] = None,
        config: Optional[StarMetaConfig] = None,
        event_callback: Optional[EventCallback] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config or StarMetaConfig()
        self.store = store
        self.notifier = notifier
        self._http_client = http_client
        self._event_callback = event_callback
        self._now = now or (lambda: datetime.now(timezone.utc))

    async def check_for_updates(
        self,
        mods: Sequence[InstalledMod],
        game_id: Optional[str] = None,
    ) -> List[UpdateResult]:
        """
        Run one update check cycle

        Emits a 0% progress event, one progress event per finished fetch
        and a final ``COMPLETE`` event. Mods whose remote file cannot be
        fetched are left out of the results.

        Args:
            mods: installed mods to check
            game_id: game the mods belong to; other games are ignored

        Returns:
            one result per mod whose remote version was retrieved
        """
        game_id = game_id or self.config.game_id
        if game_id != self.config.game_id:
            return []

        mods = list(mods)
        logger.debug(f"[update] running update check for {len(mods)} mod(s)")
        if not mods:
            return []

        owned_client = self._http_client is None
        client = self._http_client or VersionFileClient(self.config.http)
        fetched: Dict[int, VersionDescriptor] = {}
        try:
            await self._fetch_all(client, mods, fetched)
        except asyncio.CancelledError:
            logger.warning("[update] check cancelled, applying partial results")
            updates = self._apply(game_id, self._compare(mods, fetched))
            self._mark_browsable(game_id, mods, updates)
            self.notifier.dismiss(self.config.notifications.progress_id)
            raise
        finally:
            if owned_client:
                await client.close()

        results = self._compare(mods, fetched)
        updates = self._apply(game_id, results)
        browsable = self._mark_browsable(game_id, mods, updates)

        self._emit(
            UpdateEvent(
                kind=EventKind.COMPLETE,
                completed=len(mods),
                total=len(mods),
                updates=tuple(updates),
                browsable=tuple(browsable),
            )
        )
        self._summarize(mods, fetched, updates)
        return results

    async def _fetch_all(
        self,
        client: HttpClient,
        mods: List[InstalledMod],
        fetched: Dict[int, VersionDescriptor],
    ) -> None:
        """Fetch remote version files into ``fetched``, keyed by mod position."""
        total = len(mods)
        completed = 0
        lock = asyncio.Lock()
        semaphore = asyncio.Semaphore(self.config.http.max_concurrent)

        self._progress(0, total)

        async def fetch(index: int, mod: InstalledMod):
            nonlocal completed
            url = mod.attr(ModAttribute.ONLINE_VERSION_URL)
            try:
                async with semaphore:
                    logger.debug(f"[fetch] retrieving latest version of {mod.id}")
                    descriptor = await fetch_version_descriptor(client, url)
                logger.info(f"[fetch] pulled data for {mod.id}")
                fetched[index] = descriptor
            except FetchFailure as e:
                logger.warning(f"[fetch] failed to check {mod.id} for updates: {e}")

            async with lock:
                completed += 1
                self._progress(completed, total)

        await asyncio.gather(*(fetch(i, mod) for i, mod in enumerate(mods)))

    def _compare(
        self,
        mods: List[InstalledMod],
        fetched: Dict[int, VersionDescriptor],
    ) -> List[UpdateResult]:
        checked_at = self._now()
        results = []
        for index, mod in enumerate(mods):
            descriptor = fetched.get(index)
            if descriptor is None:
                continue
            try:
                online_version = descriptor.version_string
            except (TypeError, ValueError):
                online_version = ""
            installed_version = str(mod.attr(ModAttribute.DISPLAY_VERSION) or "")
            results.append(
                UpdateResult(
                    mod_id=mod.id,
                    installed_version=installed_version,
                    online_version=online_version,
                    has_update=is_newer(installed_version, online_version),
                    checked_at=checked_at,
                )
            )
        return results

    def _apply(self, game_id: str, results: List[UpdateResult]) -> List[UpdateResult]:
        updates = [result for result in results if result.has_update]
        for update in updates:
            logger.info(
                f"[update] found update for {update.mod_id}: "
                f"{update.installed_version} -> {update.online_version}"
            )
            self.store.set(
                game_id,
                update.mod_id,
                ModAttribute.ONLINE_VERSION.value,
                update.online_version,
            )
            self.store.set(
                game_id,
                update.mod_id,
                ModAttribute.LAST_UPDATE_TIME.value,
                int(update.checked_at.timestamp() * 1000),
            )
        return updates

    def _mark_browsable(
        self,
        game_id: str,
        mods: List[InstalledMod],
        updates: List[UpdateResult],
    ) -> List[str]:
        """Flag updated mods with a source page so the host offers to open it."""
        sources = {mod.id: mod.attr(ModAttribute.SOURCE) for mod in mods}
        browsable = []
        for update in updates:
            if sources.get(update.mod_id):
                self.store.set(game_id, update.mod_id, NEWEST_FILE_ID, UNKNOWN_FILE_ID)
                browsable.append(update.mod_id)
        return browsable

    def _summarize(
        self,
        mods: List[InstalledMod],
        fetched: Dict[int, VersionDescriptor],
        updates: List[UpdateResult],
    ) -> None:
        self.notifier.dismiss(self.config.notifications.progress_id)

        if updates:
            names = {mod.id: mod.attr(ModAttribute.MOD_NAME) or mod.id for mod in mods}
            lines = [
                f"{names[u.mod_id]} ({u.online_version} vs {u.installed_version})"
                for u in updates
            ]
            self.notifier.post(
                Notification(
                    id=self.config.notifications.progress_id,
                    type=NotificationType.SUCCESS,
                    message=f"{len(updates)} update(s) found for Starsector mods.\n"
                    + "\n".join(lines),
                )
            )
        elif not fetched:
            self.notifier.post(
                Notification(
                    id=self.config.notifications.progress_id,
                    type=NotificationType.WARNING,
                    message="Could not check any Starsector mods for updates.",
                )
            )
        else:
            logger.info("[update] all checked mods are up to date")

    def _progress(self, completed: int, total: int) -> None:
        event = UpdateEvent(kind=EventKind.PROGRESS, completed=completed, total=total)
        self.notifier.post(
            Notification(
                id=self.config.notifications.progress_id,
                type=NotificationType.ACTIVITY,
                message="Checking Starsector mods for update",
                progress=event.percent,
            )
        )
        self._emit(event)

    def _emit(self, event: UpdateEvent) -> None:
        if self._event_callback:
            self._event_callback(event)
