"""Live playlist and publishing stream endpoints."""

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, Response
from pydantic import BaseModel

from hlsstitch.instances.stitcher import get_stitch_service
from hlsstitch.playlist import PlaylistError
from hlsstitch.playlist.constants import CONTENT_TYPE
from hlsstitch.services.stitcher import UnknownStreamError
from hlsstitch.utils.api_models import MessageResponseModel
from hlsstitch.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Media/Stream"])

NO_CACHE_HEADERS = {"Cache-Control": "no-cache"}


class SourceRequest(BaseModel):
    name: str


# region /playlist.m3u8
@router.get("/playlist.m3u8", response_class=Response)
async def playlist() -> Response:
    """Serve the live playlist, refreshing it from the current source when stale."""
    try:
        content = await get_stitch_service().render_playlist()
    except PlaylistError as e:
        logger.error("Failed to update playlist: %s", e)  # noqa: TRY400 Short error for requests
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Failed to update playlist: {e}",
        ) from e

    return Response(content, media_type=CONTENT_TYPE, headers=NO_CACHE_HEADERS)


# region /sources
@router.get("/sources")
def sources() -> list[str]:
    """List the publishing streams."""
    return get_stitch_service().sources()


# region /transition
@router.post("/transition")
async def transition(source: SourceRequest) -> MessageResponseModel:
    """Make a publishing stream the live source."""
    try:
        await get_stitch_service().switch_source(source.name)
    except UnknownStreamError:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"Unknown source: {source.name}",
        ) from None
    except PlaylistError as e:
        logger.error("Failed to switch to '%s': %s", source.name, e)  # noqa: TRY400 Short error for requests
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Failed to switch source: {e}",
        ) from e

    return MessageResponseModel(message="OK")


# region /stream/
# Publish callbacks from the ingest server, these are form encoded
@router.post("/stream/begin")
async def stream_begin(name: Annotated[str, Form()]) -> MessageResponseModel:
    """A stream started publishing."""
    await get_stitch_service().stream_begin(name)
    return MessageResponseModel(message="OK")


@router.post("/stream/end")
async def stream_end(name: Annotated[str, Form()]) -> MessageResponseModel:
    """A stream stopped publishing."""
    try:
        await get_stitch_service().stream_end(name)
    except PlaylistError as e:
        logger.error("Failed to fall back after '%s' ended: %s", name, e)  # noqa: TRY400 Short error for requests
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail=f"Failed to switch source: {e}",
        ) from e

    return MessageResponseModel(message="OK")
