from __future__ import annotations

import os
from dataclasses import dataclass

from .urls import MARKET_PLAY_STORE_URL

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; magneto)"


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class MagnetoConfig:
    base_url: str = MARKET_PLAY_STORE_URL
    timeout_s: float = 45
    user_agent: str | None = DEFAULT_USER_AGENT
    max_workers: int = 4
    # Identifier used when an operation is called without one.
    package_id: str | None = None

    def __post_init__(self) -> None:
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @classmethod
    def from_env(cls) -> MagnetoConfig:
        """Build a config from ``MAGNETO_*`` environment variables.

        Unset variables keep their defaults.
        """

        kwargs: dict[str, object] = {}
        base_url = _env("MAGNETO_BASE_URL")
        if base_url:
            kwargs["base_url"] = base_url
        timeout = _env("MAGNETO_TIMEOUT")
        if timeout:
            kwargs["timeout_s"] = float(timeout)
        user_agent = _env("MAGNETO_USER_AGENT")
        if user_agent:
            kwargs["user_agent"] = user_agent
        workers = _env("MAGNETO_MAX_WORKERS")
        if workers:
            kwargs["max_workers"] = int(workers)
        package_id = _env("MAGNETO_PACKAGE_ID")
        if package_id:
            kwargs["package_id"] = package_id
        return cls(**kwargs)  # type: ignore[arg-type]
