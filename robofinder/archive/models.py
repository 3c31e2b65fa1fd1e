# robofinder/archive/models.py
"""
Data models passed between the archive clients and the engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from robofinder.errors import SnapshotFetchError


@dataclass(frozen=True, slots=True)
class TimestampEntry:
    """One capture listed by the CDX index: 14-digit timestamp and the captured URL."""

    timestamp: str
    original: str


@dataclass(slots=True)
class SnapshotResult:
    """Body of one archived snapshot, or the reason it could not be fetched."""

    url: str
    body: str = ""
    error: Optional[SnapshotFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
