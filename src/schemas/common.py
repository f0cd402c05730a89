"""Shared response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Acknowledgement for operations with no resource to return."""

    success: bool = True
    message: str
