from urllib.parse import quote

from pydantic import (
    BaseModel,
    ConfigDict,
    HttpUrl,
    field_validator,
)

from hlsstitch.utils.logger import get_logger

logger = get_logger(__name__)

MIN_FETCH_TIMEOUT = 1.0
DEFAULT_FETCH_TIMEOUT = 10.0


class StitchConf(BaseModel):
    """Upstream and stitching configuration definition."""

    model_config = ConfigDict(extra="ignore")  # Ignore extras for config related things

    upstream_base_url: HttpUrl = HttpUrl("http://localhost:8080/hls/")
    segment_prefix: str = "hls/"
    discontinuity_tags: bool = True
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    @field_validator("upstream_base_url", mode="after")
    @classmethod
    def validate_upstream_base_url(cls, value: HttpUrl) -> HttpUrl:
        """Stream names get appended to this, so it needs a trailing slash."""
        if not value.encoded_string().endswith("/"):
            value = HttpUrl(value.encoded_string() + "/")
        return value

    @field_validator("fetch_timeout", mode="after")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Validate the upstream fetch timeout."""
        if value < MIN_FETCH_TIMEOUT:
            logger.warning(
                "fetch_timeout '%s' must be at least %s, setting to default of %s",
                value,
                MIN_FETCH_TIMEOUT,
                DEFAULT_FETCH_TIMEOUT,
            )
            value = DEFAULT_FETCH_TIMEOUT

        return value

    def upstream_url(self, stream_name: str) -> str:
        """The upstream playlist URL of a publishing stream, the name is always one path segment."""
        return f"{self.upstream_base_url.encoded_string()}{quote(stream_name, safe='')}.m3u8"
