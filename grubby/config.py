from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EngineConfig:
    max_match_factors: int = int(os.getenv("GRUBBY_MAX_MATCH_FACTORS", "3"))
    cache_enabled: bool = _env_bool("GRUBBY_CACHE_ENABLED", "true")
    cache_ttl: float = float(os.getenv("GRUBBY_CACHE_TTL", "300"))
    cache_max_entries: int = int(os.getenv("GRUBBY_CACHE_MAX_ENTRIES", "256"))

    def __post_init__(self) -> None:
        if self.max_match_factors < 1:
            raise ValueError(f"max_match_factors must be at least 1, got {self.max_match_factors}")
        if self.cache_max_entries < 1:
            raise ValueError(f"cache_max_entries must be at least 1, got {self.cache_max_entries}")


DEFAULT_ENGINE_CONFIG = EngineConfig()
