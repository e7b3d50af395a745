"""
API Module - Black Box Interface

Purpose: HTTP request/response models
Interface: Pydantic models used by the route handlers
Hidden: Validation rules

The API layer only orchestrates - it contains no business logic.
"""

from .models import FailRunRequest, HealthResponse, RunStateResponse

__all__ = [
    "FailRunRequest",
    "HealthResponse",
    "RunStateResponse",
]
