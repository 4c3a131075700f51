from hlsstitch.services.stitcher import StitchService

_stitch_service: StitchService | None = None


def set_stitch_service(service: StitchService) -> None:
    """Set the global StitchService instance."""
    global _stitch_service  # noqa: PLW0603 Lazy Loading
    _stitch_service = service


def get_stitch_service() -> StitchService:
    """Get the global StitchService instance."""
    if _stitch_service is None:
        msg = "StitchService instance is not set."
        raise ValueError(msg)
    return _stitch_service
