"""Health check response model."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """API health response payload."""

    status: str = "OK"
    message: str = "World API is running"
