"""Errors raised while reading, fetching and stitching playlists."""


class PlaylistError(Exception):
    """Base for all playlist errors."""


class FormatError(PlaylistError, ValueError):
    """The playlist text is malformed."""


class HeaderAccessError(FormatError):
    """A header value does not match the sub-grammar that was asked for."""


class FetchError(PlaylistError):
    """The upstream playlist could not be fetched."""

    def __init__(self, url: str, message: str) -> None:
        """Keep the url around for the API error detail."""
        self.url = url
        super().__init__(f"{message} {url}")
