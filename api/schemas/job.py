"""
Pydantic schemas for the /api/jobs endpoints.

JobCreate is what a producer sends. Everything else about a job (id,
createdAt, status) is assigned by the server, so responses are the
ComputeJob model itself, serialized with its camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.job import ComputeJob


class JobCreate(BaseModel):
    """Request body for POST /api/jobs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_type: str = Field(
        default="Simulation",
        min_length=1,
        max_length=100,
        examples=["Training"],
    )
    duration_seconds: int = Field(
        default=10,
        ge=0,
        description="Seconds of simulated work",
    )

    def to_job(self) -> ComputeJob:
        """New Queued job with a fresh id and creation time."""
        return ComputeJob(job_type=self.job_type, duration_seconds=self.duration_seconds)
