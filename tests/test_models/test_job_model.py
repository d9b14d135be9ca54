"""Tests for the ComputeJob model and the status lifecycle."""

import uuid

from models.enums import JobStatus
from models.job import ComputeJob


def test_new_job_defaults():
    job = ComputeJob()
    assert isinstance(job.id, uuid.UUID)
    assert job.status == JobStatus.QUEUED
    assert job.job_type == "Simulation"
    assert job.duration_seconds == 10
    assert job.created_at.tzinfo is not None


def test_ids_are_unique():
    ids = {ComputeJob().id for _ in range(100)}
    assert len(ids) == 100


def test_json_uses_camel_case():
    job = ComputeJob(job_type="Training", duration_seconds=5)
    raw = job.to_json()

    assert '"jobType":"Training"' in raw
    assert '"durationSeconds":5' in raw
    assert '"status":"Queued"' in raw
    assert '"createdAt"' in raw


def test_json_round_trip_keeps_every_field():
    job = ComputeJob(job_type="Training", duration_seconds=5, status=JobStatus.RUNNING)
    assert ComputeJob.from_json(job.to_json()) == job


def test_forward_transitions_allowed():
    assert ComputeJob().can_transition_to(JobStatus.RUNNING)

    running = ComputeJob(status=JobStatus.RUNNING)
    assert running.can_transition_to(JobStatus.COMPLETED)
    assert running.can_transition_to(JobStatus.FAILED)


def test_queued_cannot_skip_running():
    job = ComputeJob()
    assert not job.can_transition_to(JobStatus.COMPLETED)
    assert not job.can_transition_to(JobStatus.FAILED)


def test_backward_transition_rejected():
    job = ComputeJob(status=JobStatus.RUNNING)
    assert not job.can_transition_to(JobStatus.QUEUED)


def test_terminal_status_is_final():
    for terminal in (JobStatus.COMPLETED, JobStatus.FAILED):
        job = ComputeJob(status=terminal)
        assert job.can_transition_to(terminal)  # idempotent
        assert not job.can_transition_to(JobStatus.QUEUED)
        assert not job.can_transition_to(JobStatus.RUNNING)

    assert not ComputeJob(status=JobStatus.COMPLETED).can_transition_to(JobStatus.FAILED)
    assert not ComputeJob(status=JobStatus.FAILED).can_transition_to(JobStatus.COMPLETED)


def test_is_terminal():
    assert not JobStatus.QUEUED.is_terminal
    assert not JobStatus.RUNNING.is_terminal
    assert JobStatus.COMPLETED.is_terminal
    assert JobStatus.FAILED.is_terminal
