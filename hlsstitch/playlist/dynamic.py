"""The live playlist that upstream snapshots get stitched into."""

import threading

from hlsstitch.utils.logger import get_logger

from .constants import LIVE_WINDOW_SIZE, MEDIA_SEQUENCE_HEADER, SWITCH_TAIL_SIZE, TARGET_DURATION_HEADER
from .errors import HeaderAccessError
from .header import HeaderValue
from .models import Entry, Playlist

logger = get_logger(__name__)


class DynamicPlaylist:
    """An accumulated live playlist, fed one upstream snapshot at a time.

    Continuity merges append whatever the snapshot has past the last segment
    we already hold, and keep a sliding window. Switch merges take the tail of
    the new source, optionally behind a discontinuity marker.

    update() and render() hold a lock, a render never sees a half merge.
    """

    def __init__(
        self,
        source: Playlist,
        location_prefix: str = "",
        *,
        discontinuity_tags: bool = True,
    ) -> None:
        """Seed from an initial snapshot, which is copied."""
        self._playlist = source.copy()
        self._lock = threading.Lock()
        self.location_prefix = location_prefix
        self.discontinuity_tags = discontinuity_tags

        self._outward_sequence = 1
        self._last_observed_sequence = 0
        if MEDIA_SEQUENCE_HEADER in source.headers:
            try:
                self._last_observed_sequence = source.header(MEDIA_SEQUENCE_HEADER).as_int()
            except HeaderAccessError:
                logger.warning(
                    "Initial playlist has a bad %s header: '%s'",
                    MEDIA_SEQUENCE_HEADER,
                    source.header(MEDIA_SEQUENCE_HEADER),
                )

        self._publish_sequence()

    def __repr__(self) -> str:
        return (
            f"DynamicPlaylist(entries={len(self._playlist.entries)}, "
            f"outward_sequence={self._outward_sequence}, "
            f"last_observed_sequence={self._last_observed_sequence})"
        )

    # region Getters
    @property
    def outward_sequence(self) -> int:
        """The media sequence we hand out."""
        return self._outward_sequence

    @property
    def last_observed_sequence(self) -> int:
        """The upstream media sequence seen at the last continuity merge."""
        return self._last_observed_sequence

    @property
    def entries(self) -> list[Entry]:
        """A copy of the current entries."""
        with self._lock:
            return list(self._playlist.entries)

    @property
    def headers(self) -> dict[str, HeaderValue]:
        """A copy of the current headers."""
        with self._lock:
            return dict(self._playlist.headers)

    def header(self, name: str) -> HeaderValue:
        """Get a header value, missing headers are empty."""
        with self._lock:
            return self._playlist.header(name)

    def target_duration(self) -> float:
        """The upstream target duration in seconds."""
        if TARGET_DURATION_HEADER not in self._playlist.headers:
            msg = f"Playlist has no {TARGET_DURATION_HEADER} header"
            raise HeaderAccessError(msg)
        return self.header(TARGET_DURATION_HEADER).as_float()

    # region Merge
    def update(self, snapshot: Playlist, *, is_source_switch: bool = False) -> bool:
        """Merge an upstream snapshot, returns False when there was nothing new."""
        with self._lock:
            if is_source_switch:
                self._stitch_switch(snapshot)
                self._advance_sequence()
                return True

            if MEDIA_SEQUENCE_HEADER not in snapshot.headers:
                msg = f"Upstream playlist has no {MEDIA_SEQUENCE_HEADER} header"
                raise HeaderAccessError(msg)

            sequence = snapshot.header(MEDIA_SEQUENCE_HEADER).as_int(32)

            if sequence == self._last_observed_sequence:
                logger.trace("Upstream media sequence unchanged at %d", sequence)
                return False

            self._stitch_continuity(snapshot)
            self._advance_sequence()
            self._last_observed_sequence = sequence
            return True

    def _stitch_switch(self, snapshot: Playlist) -> None:
        """Append the tail of a snapshot from a different source."""
        entries = snapshot.entries
        start = max(len(entries) - SWITCH_TAIL_SIZE, 0)

        window: list[Entry] = []
        i = len(entries) - 1
        # Markers don't count towards the tail, so each one widens it
        while i >= max(start, 0):
            window.insert(0, entries[i])
            if entries[i].is_discontinuity:
                start -= 1
            i -= 1

        if self.discontinuity_tags:
            window.insert(0, Entry.discontinuity())

        logger.debug("Switch merge, appending %d entries", len(window))
        self._playlist.entries.extend(window)

    def _stitch_continuity(self, snapshot: Playlist) -> None:
        """Append what the snapshot has after our last entry, then trim to the live window."""
        entries = snapshot.entries
        latest = self._playlist.latest_entry()

        new_start = 0  # No overlap, take the lot
        for i in range(len(entries) - 1, -1, -1):
            if entries[i].is_discontinuity:
                continue
            if latest is not None and entries[i].location == latest.location:
                new_start = i + 1
                break
        else:
            logger.debug("No overlap with the upstream playlist, appending all %d entries", len(entries))

        self._playlist.entries.extend(entries[new_start:])
        logger.trace("Continuity merge, appended %d entries", len(entries) - new_start)

        if len(self._playlist.entries) > LIVE_WINDOW_SIZE:
            del self._playlist.entries[:-LIVE_WINDOW_SIZE]

    def _advance_sequence(self) -> None:
        self._outward_sequence += 1
        self._publish_sequence()

    def _publish_sequence(self) -> None:
        self._playlist.headers[MEDIA_SEQUENCE_HEADER] = HeaderValue(str(self._outward_sequence))

    # region Render
    def render(self) -> str:
        """Render for delivery, locations get the prefix and there is no end tag."""
        with self._lock:
            return self._playlist.render(self._prefix_location, end_list=False)

    def _prefix_location(self, location: str) -> str:
        return self.location_prefix + location
