"""Fetching upstream playlists."""

from .fetcher import ByteSource, PlaylistFetcher

__all__ = ["ByteSource", "PlaylistFetcher"]
