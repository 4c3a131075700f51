import os
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from rich import traceback

from hlsstitch.api.main import api_router, stream_router
from hlsstitch.constants import API_V1_STR, SETTINGS_FILE, TESTING_ENV_VAR
from hlsstitch.instances.config import settings
from hlsstitch.instances.stitcher import set_stitch_service
from hlsstitch.services.stitcher import StitchService
from hlsstitch.utils.logger import get_logger, setup_logger
from hlsstitch.version import PROGRAM_NAME, __version__

if TYPE_CHECKING:
    from fastapi.routing import APIRoute
else:
    APIRoute = object


IN_TESTING_MODE: bool = bool(os.getenv(TESTING_ENV_VAR))

logger = get_logger(__name__)


def _startup_banner() -> str:
    rule = "-" * 79
    lines = [
        f"{PROGRAM_NAME} {__version__}",
        f"Config file: {SETTINGS_FILE.absolute()}",
        f"Upstream: {settings.app.upstream_base_url}",
        f"Segment prefix: '{settings.app.segment_prefix}'",
        f"Discontinuity tags: {settings.app.discontinuity_tags}",
    ]
    return "\n".join([">>>", rule, *lines, rule])


if not IN_TESTING_MODE:  # pragma: no cover
    traceback.install()
    setup_logger(settings=settings.logging)
    setup_logger(settings=settings.logging, in_logger="uvicorn.error")
    logger.info(_startup_banner())


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Create the stitch service for the life of the app."""
    instance_id = str(random.randbytes(4).hex())  # noqa: S311 Not crypto related
    set_stitch_service(StitchService(conf=settings.app, instance_id=instance_id))
    yield


app = FastAPI(
    title=PROGRAM_NAME,
    openapi_url=f"{API_V1_STR}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)
app.include_router(api_router, prefix=API_V1_STR)
app.include_router(stream_router)
