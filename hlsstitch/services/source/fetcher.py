"""Upstream playlist fetching."""

from typing import Protocol

import aiohttp

from hlsstitch.playlist import FetchError, Playlist, parse_playlist
from hlsstitch.utils.exception_handling import describe_aiohttp_exception, log_aiohttp_exception
from hlsstitch.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT = 10


class ByteSource(Protocol):
    """Anything that can fetch playlist text from a URL."""

    async def fetch(self, url: str) -> str:
        """Get the text at the url, raise FetchError on failure."""
        ...


class PlaylistFetcher:
    """Fetch upstream playlists over HTTP."""

    def __init__(self, timeout: float = DEFAULT_FETCH_TIMEOUT) -> None:
        """A session is made per fetch, upstream polls are infrequent."""
        self.timeout = timeout

    async def fetch(self, url: str) -> str:
        """Get the playlist text at the url."""
        logger.trace("Fetching upstream playlist %s", url)
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url) as resp:
                    resp.raise_for_status()
                    content_bytes = await resp.read()
        except (aiohttp.ClientError, TimeoutError) as e:
            log_aiohttp_exception(logger, url, e, "fetching upstream playlist")
            raise FetchError(url, describe_aiohttp_exception(e)) from e

        return content_bytes.decode("utf-8", errors="replace")

    async def fetch_playlist(self, url: str) -> Playlist:
        """Fetch and parse the playlist at the url."""
        return parse_playlist(await self.fetch(url))
