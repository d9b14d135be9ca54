"""
ComputeJob — the unit of work stored in Redis.

The whole record lives under jobs:data:<id> as one JSON string. The same
shape goes over HTTP, so field aliases are camelCase (jobType,
durationSeconds, createdAt) while Python code uses snake_case.

Key design decisions:
- UUID id generated at creation: unique, never reused, no counter to coordinate
- created_at in UTC, set once and never touched again
- status is the only field that changes after enqueue
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.enums import JobStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ComputeJob(BaseModel):

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    created_at: datetime = Field(default_factory=_utcnow)
    status: JobStatus = JobStatus.QUEUED
    job_type: str = "Simulation"
    duration_seconds: int = Field(default=10, ge=0)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "ComputeJob":
        return cls.model_validate_json(raw)

    def can_transition_to(self, status: JobStatus) -> bool:
        """
        True if `status` is the next step of the lifecycle.

        Queued only moves to Running, Running only to Completed or Failed.
        Re-applying the current status is allowed (idempotent update).
        Once terminal, the only allowed status is the same terminal one.
        """
        if status == self.status:
            return True
        if self.status.is_terminal:
            return False
        return status.rank == self.status.rank + 1

    def __repr__(self) -> str:
        return f"<ComputeJob {self.id} [{self.job_type}] {self.status.value}>"
