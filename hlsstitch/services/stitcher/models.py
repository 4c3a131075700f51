from pydantic import BaseModel


class StitchStatus(BaseModel):
    """Snapshot of the stitcher state for the API."""

    streaming: bool
    current_stream: str | None
    sources: list[str]
    outward_sequence: int | None
    entries: int
    target_duration: float
