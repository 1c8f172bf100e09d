"""
Health Check Schemas

Pydantic schemas for health check endpoints.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response schema.

    Attributes:
        status: "ok" when the database answers, "degraded" otherwise.
        service: Service name.
        database_available: Result of the database probe.
        documents_by_status: Document count per processing status; empty
            when the database is unavailable.
    """

    status: str
    service: str = ""
    database_available: bool = True
    documents_by_status: dict[str, int] = Field(default_factory=dict)
