"""
Seed script — submits a few sample jobs for demo purposes.

Usage:
    python -m scripts.seed_jobs

Run this with the API and at least one worker up, then watch the worker
logs or poll GET /api/jobs/{id}.
"""

import httpx

BASE_URL = "http://localhost:8000"


def seed():
    client = httpx.Client(base_url=BASE_URL, timeout=10.0)

    jobs = [
        {"jobType": "Training", "durationSeconds": 5},
        {"jobType": "Simulation", "durationSeconds": 10},
        {"jobType": "Rendering", "durationSeconds": 3},
        {"jobType": "Instant", "durationSeconds": 0},
    ]

    print(f"Submitting {len(jobs)} jobs to {BASE_URL}...\n")

    for job in jobs:
        resp = client.post("/api/jobs", json=job)
        resp.raise_for_status()
        data = resp.json()
        print(f"  [{data['status']}] {data['jobType']} {data['durationSeconds']}s (id: {data['id'][:8]}...)")

    print("\nDone! Jobs are waiting for a worker.")
    print("Queued jobs:  curl http://localhost:8000/api/jobs")
    print("Failed jobs:  curl http://localhost:8000/api/jobs/failed")


if __name__ == "__main__":
    seed()
