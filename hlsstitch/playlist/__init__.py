"""M3U8 playlist model, parser and the live stitching engine."""

from .dynamic import DynamicPlaylist
from .errors import FetchError, FormatError, HeaderAccessError, PlaylistError
from .header import HeaderValue, parse_header_line
from .models import Entry, Playlist, render_playlist
from .parser import parse_playlist

__all__ = [
    "DynamicPlaylist",
    "Entry",
    "FetchError",
    "FormatError",
    "HeaderAccessError",
    "HeaderValue",
    "Playlist",
    "PlaylistError",
    "parse_header_line",
    "parse_playlist",
    "render_playlist",
]
