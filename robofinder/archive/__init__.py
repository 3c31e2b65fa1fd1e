"""robofinder.archive: clients for the web archive's CDX index and replay endpoints."""

from .cdx import CDX_ENDPOINT, CdxClient, build_query, parse_timestamps
from .models import SnapshotResult, TimestampEntry
from .snapshot import REPLAY_ENDPOINT, SnapshotFetcher, snapshot_url

__all__ = [
    "CDX_ENDPOINT",
    "REPLAY_ENDPOINT",
    "CdxClient",
    "SnapshotFetcher",
    "SnapshotResult",
    "TimestampEntry",
    "build_query",
    "parse_timestamps",
    "snapshot_url",
]
