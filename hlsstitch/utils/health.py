from pydantic import BaseModel

from hlsstitch.services.stitcher import StitchStatus


class HealthResponseModel(BaseModel):
    version: str
    version_full: str
    memory_usage_mb: str
    stitcher: StitchStatus
