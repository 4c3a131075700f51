"""Owns the live playlist and the publishing streams."""

from .models import StitchStatus
from .registry import StreamRegistry, UnknownStreamError
from .service import StitchService

__all__ = ["StitchService", "StitchStatus", "StreamRegistry", "UnknownStreamError"]
