"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., REDIS_HOST env var → Settings.REDIS_HOST)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Both processes (API and worker) import `settings` from here instead of
hardcoding values.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Redis (the queue store) ─────────────────────────────────
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_SOCKET_TIMEOUT: float = 5.0  # seconds before a store call counts as timed out

    # ── Queue client retry ──────────────────────────────────────
    QUEUE_MAX_RETRIES: int = 3           # retries after the first attempt
    QUEUE_RETRY_BASE_DELAY: float = 0.2  # first backoff in seconds, doubled each retry

    # ── Worker ──────────────────────────────────────────────────
    WORKER_IDLE_INTERVAL: float = 5.0  # seconds to wait when the queue is empty
    WORKER_TIME_SCALE: float = 1.0     # seconds of simulated work per durationSeconds unit

    # ── App ─────────────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    @property
    def redis_url(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import this everywhere
settings = Settings()
