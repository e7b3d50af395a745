"""
Reddyt API data models.

These models define the request and response bodies of the admin API.
Run documents are served as the lifecycle Run model directly.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..runs.lifecycle import RunState


class FailRunRequest(BaseModel):
    """Request to mark a run as failed."""

    message: str = Field(
        ...,
        description="Human readable failure description",
        min_length=1,
        max_length=4099,
    )


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str = "healthy"
    version: str


class RunStateResponse(BaseModel):
    """Short form of a run transition."""

    run_id: int
    current_state: RunState
    error: Optional[str] = None
