"""Generic API models."""

from pydantic import BaseModel


class MessageResponseModel(BaseModel):
    """Generic API response message model."""

    message: str
    errors: list[str] | None = None
