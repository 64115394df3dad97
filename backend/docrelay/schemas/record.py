"""
DocRelay Backend — API Schemas
===============================

What:  Pydantic models for the JSON responses that have a fixed shape.
Why:   Records themselves are schemaless; only the insert acknowledgment
       and the health report have a contract.
"""

from pydantic import BaseModel, ConfigDict, Field


class InsertResult(BaseModel):
    """
    Driver acknowledgment for one inserted record.

    Serialized with camelCase keys:
        {"acknowledged": true, "insertedId": "65f1c0..."}
    """

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(description="Whether the write was acknowledged by the server")
    inserted_id: str = Field(
        alias="insertedId",
        description="Hex string of the generated ObjectId",
    )


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
