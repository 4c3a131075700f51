"""Names of the streams that are currently publishing."""

from hlsstitch.utils.logger import get_logger

logger = get_logger(__name__)


class UnknownStreamError(KeyError):
    """No stream with that name is publishing."""


class StreamRegistry:
    """Publishing streams, in the order they started."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def add(self, name: str) -> None:
        """Register a stream, registering twice is a no-op."""
        if name in self._names:
            logger.debug("Stream '%s' is already registered", name)
            return

        self._names.append(name)
        logger.info("Stream '%s' started publishing, %d streams", name, len(self._names))

    def remove(self, name: str) -> bool:
        """Unregister a stream, False if it was never registered."""
        if name not in self._names:
            logger.warning("Stream '%s' ended but was never registered", name)
            return False

        self._names.remove(name)
        logger.info("Stream '%s' stopped publishing, %d streams", name, len(self._names))
        return True

    def latest(self) -> str | None:
        """The most recently registered stream."""
        if not self._names:
            return None
        return self._names[-1]
