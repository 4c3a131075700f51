"""The live playlist service, switching between publishing streams."""

import asyncio
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from hlsstitch.playlist import DynamicPlaylist, Playlist, PlaylistError, parse_playlist
from hlsstitch.playlist.constants import END_LIST_TAG
from hlsstitch.services.source import ByteSource, PlaylistFetcher
from hlsstitch.utils.logger import get_logger

from .models import StitchStatus
from .registry import StreamRegistry, UnknownStreamError

if TYPE_CHECKING:
    from hlsstitch.core.config import StitchConf
else:
    StitchConf = object

logger = get_logger(__name__)


class StitchService:
    """Owns the one outward live playlist.

    Every fetch, merge and render happens under a single lock, so a playlist
    request and a source switch can't interleave their merges.
    """

    def __init__(
        self,
        conf: StitchConf,
        fetcher: ByteSource | None = None,
        clock: Callable[[], float] = time.monotonic,
        instance_id: str = "",
    ) -> None:
        """Nothing is fetched until the first source is switched to."""
        self._instance_id = instance_id
        logger.debug("Initializing StitchService (%s)", self._instance_id)
        self._conf = conf
        self._fetcher: ByteSource = fetcher if fetcher is not None else PlaylistFetcher(timeout=conf.fetch_timeout)
        self._clock = clock
        self._lock = asyncio.Lock()

        self.registry = StreamRegistry()
        self.playlist: DynamicPlaylist | None = None
        self.current_stream: str | None = None
        self.streaming = False
        self.target_duration = 0.0
        self.time_to_wait = 0.0
        self.last_update = 0.0
        self._pending_switch = False

    # region Streams
    def sources(self) -> list[str]:
        """Names of the publishing streams."""
        return self.registry.names

    async def stream_begin(self, name: str) -> None:
        """A stream started publishing."""
        async with self._lock:
            self.registry.add(name)

    async def stream_end(self, name: str) -> None:
        """A stream stopped publishing, fall back to another one if it was live."""
        async with self._lock:
            if not self.registry.remove(name) or name != self.current_stream:
                return

            fallback = self.registry.latest()
            if fallback is None:
                logger.info("Last live stream '%s' ended, ending the playlist", name)
                self.streaming = False
                self.current_stream = None
                return

            logger.info("Live stream '%s' ended, falling back to '%s'", name, fallback)
            try:
                await self._switch_to(fallback)
            except PlaylistError:
                # The next playlist request retries the switch
                self.current_stream = fallback
                self._pending_switch = True
                raise

    async def switch_source(self, name: str) -> None:
        """Make a publishing stream the live one."""
        async with self._lock:
            if name not in self.registry:
                raise UnknownStreamError(name)

            await self._switch_to(name)

    async def _switch_to(self, name: str) -> None:
        snapshot = await self._fetch_snapshot(name)

        if self.playlist is None or not self.streaming:
            playlist = DynamicPlaylist(
                snapshot,
                self._conf.segment_prefix,
                discontinuity_tags=self._conf.discontinuity_tags,
            )
            self.target_duration = playlist.target_duration()
            self.playlist = playlist
            self.streaming = True
            logger.info("Started live playlist from '%s', target duration %ss", name, self.target_duration)
        else:
            self.playlist.update(snapshot, is_source_switch=True)
            logger.info("Switched live playlist from '%s' to '%s'", self.current_stream, name)

        self.current_stream = name
        self._pending_switch = False
        self.last_update = self._clock()
        self.time_to_wait = self.target_duration

    # region Playlist
    async def render_playlist(self) -> str:
        """Render the outward playlist, refreshing it from upstream when it is stale."""
        async with self._lock:
            if self.playlist is None:
                return Playlist.empty().render()

            if self.streaming and self._pending_switch and self.current_stream is not None:
                await self._switch_to(self.current_stream)
            elif self.streaming and self._clock() - self.last_update >= self.time_to_wait:
                await self._refresh(self.playlist)

            text = self.playlist.render()
            if not self.streaming:
                text += END_LIST_TAG + "\n"

            return text

    async def _refresh(self, playlist: DynamicPlaylist) -> None:
        if self.current_stream is None:
            return

        snapshot = await self._fetch_snapshot(self.current_stream)
        updated = playlist.update(snapshot)
        self.last_update = self._clock()

        # Poll again sooner when upstream had nothing new
        self.time_to_wait = self.target_duration if updated else self.target_duration / 2
        logger.trace("Refreshed from '%s', updated=%s", self.current_stream, updated)

    async def _fetch_snapshot(self, name: str) -> Playlist:
        return parse_playlist(await self._fetcher.fetch(self._conf.upstream_url(name)))

    # region Status
    def status(self) -> StitchStatus:
        """Current state for the API."""
        return StitchStatus(
            streaming=self.streaming,
            current_stream=self.current_stream,
            sources=self.registry.names,
            outward_sequence=self.playlist.outward_sequence if self.playlist is not None else None,
            entries=len(self.playlist.entries) if self.playlist is not None else 0,
            target_duration=self.target_duration,
        )
