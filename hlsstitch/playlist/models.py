"""Playlist data model and serialization."""

from collections.abc import Callable
from dataclasses import dataclass

from .constants import DISCONTINUITY_TAG, END_LIST_TAG, FORMAT_TAG, SEGMENT_TAG
from .header import HeaderValue

LocationRewriter = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class Entry:
    """A media segment, or a discontinuity marker."""

    duration: float = 0.0
    location: str = ""
    is_discontinuity: bool = False

    @classmethod
    def segment(cls, duration: float, location: str) -> "Entry":
        """Create a media segment entry."""
        return cls(duration=duration, location=location)

    @classmethod
    def discontinuity(cls) -> "Entry":
        """Create a discontinuity marker."""
        return cls(is_discontinuity=True)

    def render(self, location_rewriter: LocationRewriter | None = None) -> str:
        """Render the entry, a segment takes two lines."""
        if self.is_discontinuity:
            return DISCONTINUITY_TAG

        location = self.location
        if location_rewriter is not None:
            location = location_rewriter(location)

        return f"{SEGMENT_TAG}:{self.duration:.3f},\n{location}"


class Playlist:
    """Header tags plus entries in playback order.

    Header iteration order is whatever the dict gives, nothing downstream
    should depend on it.
    """

    def __init__(
        self,
        headers: dict[str, HeaderValue] | None = None,
        entries: list[Entry] | None = None,
    ) -> None:
        """Use parse_playlist() or Playlist.empty() rather than building these by hand."""
        self.headers: dict[str, HeaderValue] = headers if headers is not None else {}
        self.entries: list[Entry] = entries if entries is not None else []

    def __repr__(self) -> str:
        return f"Playlist(headers={len(self.headers)}, entries={len(self.entries)})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Playlist):
            return self.headers == other.headers and self.entries == other.entries
        return NotImplemented

    __hash__ = None  # type: ignore[assignment] # Mutable

    @classmethod
    def empty(cls) -> "Playlist":
        """A playlist with no headers or entries."""
        return cls()

    def copy(self) -> "Playlist":
        """Copy into fresh containers, entries and header values are immutable."""
        return Playlist(headers=dict(self.headers), entries=list(self.entries))

    def header(self, name: str) -> HeaderValue:
        """Get a header value, missing headers are empty."""
        return self.headers.get(name, HeaderValue())

    def latest_entry(self) -> Entry | None:
        """The last entry, if any."""
        if not self.entries:
            return None
        return self.entries[-1]

    def render(
        self,
        location_rewriter: LocationRewriter | None = None,
        *,
        end_list: bool = True,
    ) -> str:
        """Serialize to M3U8 text."""
        return render_playlist(self, location_rewriter, end_list=end_list)


def render_playlist(
    playlist: Playlist,
    location_rewriter: LocationRewriter | None = None,
    *,
    end_list: bool = True,
) -> str:
    """Serialize a playlist to M3U8 text, every line is newline terminated."""
    lines = [FORMAT_TAG]
    lines.extend(f"#{name}:{value}" for name, value in playlist.headers.items())
    lines.extend(entry.render(location_rewriter) for entry in playlist.entries)

    if end_list:
        lines.append(END_LIST_TAG)

    return "\n".join(lines) + "\n"
