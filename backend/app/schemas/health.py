"""Response model for the health endpoint."""

from typing import Literal, Optional

from pydantic import Field

from ._strict_base import StrictModel


class HealthResponse(StrictModel):
    status: Literal["ok", "error"] = Field(description="Database reachability")
    timestamp: str = Field(description="UTC ISO8601Z timestamp of the check")
    message: Optional[str] = None
