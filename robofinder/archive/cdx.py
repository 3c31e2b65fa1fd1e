# robofinder/archive/cdx.py
"""
CDX index client: lists the archived captures of a page.
"""
from __future__ import annotations

import asyncio
import json
from typing import Dict, List, Union

from aiohttp import ClientError, ClientSession

from robofinder.archive.models import TimestampEntry
from robofinder.errors import ArchiveDecodeError, ArchiveNetworkError
from robofinder.logger import logger

__all__ = ["CDX_ENDPOINT", "CdxClient", "build_query", "parse_timestamps"]

CDX_ENDPOINT = "https://web.archive.org/cdx/search/cdx"


def build_query(page_url: str, limit: int) -> Dict[str, str]:
    """
    Query parameters for the index lookup.

    Only HTTP 200 captures are listed, consecutive captures with the same
    digest are collapsed, and a negative ``limit`` returns the newest ones.
    """
    return {
        "url": page_url,
        "output": "json",
        "filter": "statuscode:200",
        "fl": "timestamp,original",
        "collapse": "digest",
        "limit": str(limit),
    }


def parse_timestamps(payload: Union[str, bytes]) -> List[TimestampEntry]:
    """Turn the JSON table returned by the index into TimestampEntry values.

    The first row is the header (field names) and is dropped. An empty
    table means the page was never captured.
    """
    try:
        rows = json.loads(payload)
    except ValueError as exc:
        raise ArchiveDecodeError(f"Error unmarshalling response: {exc}") from exc

    if not isinstance(rows, list):
        raise ArchiveDecodeError(f"Expected a JSON array, got {type(rows).__name__}")

    entries: List[TimestampEntry] = []
    for index, row in enumerate(rows[1:], start=1):
        if not isinstance(row, list) or len(row) < 2:
            raise ArchiveDecodeError(f"Row {index} has fewer than 2 columns: {row!r}")
        timestamp, original = row[0], row[1]
        if not isinstance(timestamp, str) or not isinstance(original, str):
            raise ArchiveDecodeError(f"Row {index} holds non-string values: {row!r}")
        entries.append(TimestampEntry(timestamp, original))
    return entries


class CdxClient:
    """Queries the archive's CDX endpoint over an existing aiohttp session."""

    def __init__(self, session: ClientSession, endpoint: str = CDX_ENDPOINT) -> None:
        self.session = session
        self.endpoint = endpoint

    async def fetch_timestamps(self, page_url: str, limit: int) -> List[TimestampEntry]:
        """
        Return the captures of ``page_url`` in index order.

        Raises ArchiveNetworkError on transport problems and
        ArchiveDecodeError when the payload cannot be read as a table.
        """
        params = build_query(page_url, limit)
        logger.debug("Querying archive index %s for %s (limit %d)", self.endpoint, page_url, limit)
        try:
            async with self.session.get(self.endpoint, params=params) as resp:
                if resp.status // 100 != 2:
                    raise ArchiveNetworkError(f"Archive index answered HTTP {resp.status}")
                payload = await resp.read()
        except asyncio.TimeoutError as exc:
            raise ArchiveNetworkError("Request to archive index timed out") from exc
        except ClientError as exc:
            raise ArchiveNetworkError(f"Request error: {exc}") from exc

        return parse_timestamps(payload)
