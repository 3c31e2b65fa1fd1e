# robofinder/archive/snapshot.py
"""
Snapshot fetcher: downloads raw archived copies with a fixed courtesy delay.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from robofinder.archive.models import SnapshotResult, TimestampEntry
from robofinder.errors import SnapshotFetchError
from robofinder.logger import logger

__all__ = ["REPLAY_ENDPOINT", "SnapshotFetcher", "snapshot_url"]

REPLAY_ENDPOINT = "http://web.archive.org/web"


def snapshot_url(entry: TimestampEntry, replay_base: str = REPLAY_ENDPOINT) -> str:
    """Replay URL of a capture; ``if_`` asks for the unmodified original bytes."""
    return f"{replay_base}/{entry.timestamp}if_/{entry.original}"


class SnapshotFetcher:
    """Fetches one snapshot at a time, sleeping ``delay`` seconds before every request."""

    def __init__(
        self,
        session: ClientSession,
        delay: float,
        replay_base: str = REPLAY_ENDPOINT,
    ) -> None:
        self.session = session
        self.delay = delay
        self.replay_base = replay_base

    async def fetch(self, entry: TimestampEntry) -> SnapshotResult:
        """
        Download the snapshot for ``entry``.

        Never raises for network problems: the failure is returned in
        SnapshotResult.error so the caller can move on to the next capture.
        """
        url = snapshot_url(entry, self.replay_base)
        logger.debug("Getting New Timestamp Data.\n\t%s", url)
        await asyncio.sleep(self.delay)

        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    return SnapshotResult(url, error=SnapshotFetchError(url, f"HTTP {resp.status}"))
                body = await resp.text(errors="replace")
        except asyncio.TimeoutError:
            return SnapshotResult(url, error=SnapshotFetchError(url, "request timed out"))
        except ClientError as exc:
            return SnapshotResult(url, error=SnapshotFetchError(url, str(exc) or type(exc).__name__))

        return SnapshotResult(url, body=body)
