"""M3U8 text to Playlist."""

import math

from hlsstitch.utils.logger import get_logger

from .constants import DISCONTINUITY_TAG, END_LIST_TAG, FORMAT_TAG
from .errors import FormatError, HeaderAccessError
from .header import HeaderValue, parse_header_line
from .models import Entry, Playlist

logger = get_logger(__name__)


def parse_playlist(text: str) -> Playlist:
    """Parse M3U8 text, any malformed line fails the whole parse.

    Lines ending in a comma are '#EXTINF:<duration>,' tags, the line after
    them is the segment location. Other tag lines are headers.
    Everything after '#EXT-X-ENDLIST' is ignored.
    """
    lines = iter(text.splitlines())

    head = next(lines, None)
    if head is None:
        msg = "Malformed playlist, missing header"
        raise FormatError(msg)

    if not head.startswith(FORMAT_TAG):
        msg = f"Malformed playlist, not a playlist: '{head[:50]}'"
        raise FormatError(msg)

    playlist = Playlist.empty()

    for raw_line in lines:
        line = raw_line.strip()

        if not line:
            continue

        if line == END_LIST_TAG:
            break

        if line == DISCONTINUITY_TAG:
            playlist.entries.append(Entry.discontinuity())
            continue

        if not line.endswith(","):
            if not line.startswith("#"):
                msg = f"Malformed playlist, unexpected line: '{line}'"
                raise FormatError(msg)
            name, value = parse_header_line(line)
            playlist.headers[name] = value
            continue

        duration = _parse_duration(line)

        location = next(lines, "").strip()
        if not location:
            msg = f"Malformed playlist, truncated after '{line}'"
            raise FormatError(msg)

        playlist.entries.append(Entry.segment(duration, location))

    logger.trace("Parsed playlist: %s", playlist)
    return playlist


def _parse_duration(line: str) -> float:
    _, _, duration_str = line.partition(":")

    try:
        duration = HeaderValue(duration_str.removesuffix(",")).as_float()
    except HeaderAccessError:
        msg = f"Malformed playlist, bad segment duration: '{line}'"
        raise FormatError(msg) from None

    if not math.isfinite(duration) or duration < 0:
        msg = f"Malformed playlist, segment duration out of range: '{line}'"
        raise FormatError(msg)

    return duration
