"""Multi-endpoint report models used by the date commands' JSON mode."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EndpointResult(BaseModel):
    """Raw body of one endpoint, or the error that replaced it."""
    data: bytes | None = None
    error: str | None = None


class EndpointsReport(BaseModel):
    command: str
    date: str
    start_date: str
    end_date: str
    # Insertion order is the fetch order
    endpoints: dict[str, EndpointResult] = Field(default_factory=dict)
