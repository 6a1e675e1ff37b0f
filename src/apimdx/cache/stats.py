"""Cache statistics models."""

from __future__ import annotations

from pydantic import BaseModel


class CacheStats(BaseModel):
    """Snapshot of a single cache's counters."""

    size: int = 0
    capacity: int = 0
    hits: int = 0
    misses: int = 0
    enabled: bool = True

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class CacheManagerStats(BaseModel):
    """Aggregate statistics across the type-analysis and resolution caches."""

    enabled: bool = True
    type_analysis: CacheStats
    reference_resolution: CacheStats

    @property
    def total_hits(self) -> int:
        return self.type_analysis.hits + self.reference_resolution.hits

    @property
    def total_requests(self) -> int:
        return self.type_analysis.requests + self.reference_resolution.requests

    @property
    def total_hit_rate(self) -> float:
        """Hits over requests across both caches, not a mean of per-cache rates."""
        total = self.total_requests
        return self.total_hits / total if total > 0 else 0.0
