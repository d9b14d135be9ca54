"""
Shared enumerations used across the project.

JobStatus inherits from str so it serializes to JSON as "Queued",
not "JobStatus.QUEUED", both in Redis and in API responses.

Lifecycle (forward only):

    Queued → Running → Completed
                     ↘ Failed
"""

import enum


class JobStatus(str, enum.Enum):
    QUEUED = "Queued"        # waiting in jobs:queue
    RUNNING = "Running"      # claimed by a worker, member of jobs:processing
    COMPLETED = "Completed"  # terminal
    FAILED = "Failed"        # terminal, member of jobs:failed

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)

    @property
    def rank(self) -> int:
        """Position along the lifecycle; both terminal states share the last rank."""
        return _RANKS[self]


_RANKS = {
    JobStatus.QUEUED: 0,
    JobStatus.RUNNING: 1,
    JobStatus.COMPLETED: 2,
    JobStatus.FAILED: 2,
}
