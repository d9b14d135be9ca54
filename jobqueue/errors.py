"""
Error kinds raised by the queue store and the queue client.

    QueueError
    ├── TransientStoreError   connection refused / timeout, retried by the client
    ├── StoreError            any other store failure, never retried
    ├── QueueFailure          what callers see when an operation gives up
    ├── JobNotFoundError      no body under jobs:data:<id>
    └── InvalidStatusTransitionError

No redis exception type crosses the JobQueue boundary: the store turns them
into TransientStoreError/StoreError, and the retry decorator turns those into
QueueFailure.
"""

from uuid import UUID


class QueueError(Exception):
    """Base class for everything the queue raises."""


class TransientStoreError(QueueError):
    pass


class StoreError(QueueError):
    pass


class QueueFailure(QueueError):

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")


class JobNotFoundError(QueueError):

    def __init__(self, job_id: UUID | str):
        self.job_id = str(job_id)
        super().__init__(f"Job {job_id} not found")


class InvalidStatusTransitionError(QueueError):

    def __init__(self, job_id: UUID | str, current: str, requested: str):
        self.job_id = str(job_id)
        self.current = current
        self.requested = requested
        super().__init__(
            f"Job {job_id} cannot move from {current} to {requested}"
        )
