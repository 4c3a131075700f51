"""Health API."""

from fastapi import APIRouter
from psutil import Process

from hlsstitch.instances.stitcher import get_stitch_service
from hlsstitch.utils.health import HealthResponseModel
from hlsstitch.utils.logger import get_logger
from hlsstitch.version import VERSION_FULL, __version__

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

PROCESS = Process()


@router.get("/")
def health() -> HealthResponseModel:
    """API endpoint to check the health of the service."""
    memory = str(PROCESS.memory_info().rss / (1024 * 1024))

    return HealthResponseModel(
        version=__version__,
        version_full=VERSION_FULL,
        memory_usage_mb=memory,
        stitcher=get_stitch_service().status(),
    )
