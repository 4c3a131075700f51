from fastapi import APIRouter

from .routes import stream
from .routes.api import health

api_router = APIRouter()
api_router.include_router(health.router)

stream_router = APIRouter()
stream_router.include_router(stream.router)
