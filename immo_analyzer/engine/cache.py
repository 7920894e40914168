"""In-process projection cache keyed by a content hash of the inputs.

Replaces implicit recomputation on every change: a projection is computed
once per distinct (inputs, start date) and reused by every sweep that asks
for it.
"""

import dataclasses
import hashlib
import json
import logging
import threading
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from immo_analyzer.config import settings
from immo_analyzer.models.inputs import PropertyInputs
from immo_analyzer.models.results import ProjectionResult
from immo_analyzer.engine.proforma import compute_projection, default_start_date

logger = logging.getLogger(__name__)


def _canonical(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value.normalize())
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def cache_key(inputs: PropertyInputs, start_date: date, prefix: str = "projection") -> str:
    """Deterministic key: numerically equal inputs hash identically."""
    payload = {k: _canonical(v) for k, v in dataclasses.asdict(inputs).items()}
    payload["start_date"] = _canonical(start_date)
    raw = json.dumps(payload, sort_keys=True)
    h = hashlib.sha256(raw.encode()).hexdigest()[:16]
    return f"immo:{prefix}:{h}"


class ProjectionCache:
    """Thread-safe LRU of ProjectionResults."""

    def __init__(self, max_size: int = 256):
        self.max_size = max_size
        self._entries: OrderedDict[str, ProjectionResult] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(
        self, inputs: PropertyInputs, start_date: date | None = None
    ) -> ProjectionResult:
        start_date = start_date or default_start_date()
        key = cache_key(inputs, start_date)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug("Cache hit: %s", key)
                return cached

        # Computed outside the lock; a concurrent miss on the same key
        # produces an identical result.
        result = compute_projection(inputs, start_date)

        with self._lock:
            self.misses += 1
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


_default_cache = ProjectionCache(settings.projection_cache_size)


def get_cache() -> ProjectionCache:
    return _default_cache


def compute_projection_cached(
    inputs: PropertyInputs, start_date: date | None = None
) -> ProjectionResult:
    return get_cache().get_or_compute(inputs, start_date)
