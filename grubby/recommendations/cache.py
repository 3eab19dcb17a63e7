"""
Bounded TTL cache for scored recommendation runs.

Entries hold plain serialised data, never live models, so nothing a caller
does to a returned result can leak into a later hit. Expired entries are
purged on every write and the oldest entry is evicted once the cache is full.
"""
from __future__ import annotations

import hashlib
import json
import threading
import time
from collections import OrderedDict
from typing import Any

from ..config import DEFAULT_ENGINE_CONFIG

_entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
_hits: int = 0
_misses: int = 0
_lock = threading.Lock()


def make_key(inputs: dict) -> str:
    """Stable digest of a JSON-serialisable request."""
    normalized = json.dumps(inputs, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()


def _purge_expired(now: float, ttl: float) -> None:
    expired = [key for key, (stored_at, _) in _entries.items() if now - stored_at >= ttl]
    for key in expired:
        del _entries[key]


def cache_get(key: str, ttl: float = DEFAULT_ENGINE_CONFIG.cache_ttl) -> Any | None:
    global _hits, _misses
    with _lock:
        entry = _entries.get(key)
        if entry is not None and time.time() - entry[0] < ttl:
            _entries.move_to_end(key)
            _hits += 1
            return entry[1]
        _entries.pop(key, None)
        _misses += 1
        return None


def cache_set(
    key: str,
    value: Any,
    ttl: float = DEFAULT_ENGINE_CONFIG.cache_ttl,
    max_entries: int = DEFAULT_ENGINE_CONFIG.cache_max_entries,
) -> None:
    now = time.time()
    with _lock:
        _purge_expired(now, ttl)
        _entries[key] = (now, value)
        _entries.move_to_end(key)
        while len(_entries) > max_entries:
            _entries.popitem(last=False)


def get_cache_stats() -> dict:
    with _lock:
        total = _hits + _misses
        return {
            "size": len(_entries),
            "hits": _hits,
            "misses": _misses,
            "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
        }


def clear_cache() -> None:
    global _hits, _misses
    with _lock:
        _entries.clear()
        _hits = 0
        _misses = 0
