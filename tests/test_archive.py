# File: tests/test_archive.py
"""Tests for the CDX index client and the snapshot fetcher."""
from __future__ import annotations

import json
import time

import aiohttp
import pytest

from robofinder.archive.cdx import CdxClient, build_query, parse_timestamps
from robofinder.archive.models import TimestampEntry
from robofinder.archive.snapshot import SnapshotFetcher, snapshot_url
from robofinder.errors import ArchiveDecodeError, ArchiveNetworkError, SnapshotFetchError

ROBOTS = "http://example.com/robots.txt"


# --------------------------------------------------------------------------- #
#                               Pure helpers                                  #
# --------------------------------------------------------------------------- #


def test_build_query_fields():
    params = build_query(ROBOTS, -5)
    assert params == {
        "url": ROBOTS,
        "output": "json",
        "filter": "statuscode:200",
        "fl": "timestamp,original",
        "collapse": "digest",
        "limit": "-5",
    }


def test_parse_timestamps_drops_header():
    payload = json.dumps(
        [
            ["timestamp", "original"],
            ["20150101000000", ROBOTS],
            ["20200101000000", "http://example.com:80/robots.txt"],
        ]
    )
    assert parse_timestamps(payload) == [
        TimestampEntry("20150101000000", ROBOTS),
        TimestampEntry("20200101000000", "http://example.com:80/robots.txt"),
    ]


def test_parse_timestamps_accepts_bytes():
    payload = json.dumps([["timestamp", "original"], ["20150101000000", ROBOTS]]).encode()
    assert parse_timestamps(payload) == [TimestampEntry("20150101000000", ROBOTS)]


@pytest.mark.parametrize("payload", ["[]", '[["timestamp", "original"]]'])
def test_parse_timestamps_without_captures(payload):
    assert parse_timestamps(payload) == []


@pytest.mark.parametrize(
    "payload",
    [
        "<html>Service Unavailable</html>",
        "",
        '{"timestamp": "20150101000000"}',
        '[["timestamp", "original"], ["20150101000000"]]',
        '[["timestamp", "original"], "20150101000000"]',
        '[["timestamp", "original"], [20150101000000, "x"]]',
    ],
)
def test_parse_timestamps_rejects_malformed(payload):
    with pytest.raises(ArchiveDecodeError):
        parse_timestamps(payload)


def test_snapshot_url_uses_raw_modifier():
    entry = TimestampEntry("20150101000000", ROBOTS)
    assert snapshot_url(entry) == "http://web.archive.org/web/20150101000000if_/http://example.com/robots.txt"
    assert snapshot_url(entry, "http://localhost:1/web") == (
        "http://localhost:1/web/20150101000000if_/http://example.com/robots.txt"
    )


def test_snapshot_fetch_error_message():
    err = SnapshotFetchError("http://x", "HTTP 503")
    assert str(err) == "http://x: HTTP 503"
    assert err.reason == "HTTP 503"


# --------------------------------------------------------------------------- #
#                         Against the fake archive                            #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_fetch_timestamps(archive_server):
    archive_server.add_capture("20150101000000", "Disallow: /a")
    archive_server.add_capture("20160101000000", "Disallow: /b")

    async with aiohttp.ClientSession() as session:
        entries = await CdxClient(session, archive_server.cdx_endpoint).fetch_timestamps(ROBOTS, 2)

    assert [e.timestamp for e in entries] == ["20150101000000", "20160101000000"]
    assert archive_server.index_queries == [build_query(ROBOTS, 2)]


@pytest.mark.asyncio()
async def test_fetch_timestamps_decode_error(archive_server):
    archive_server.index_raw = "not json at all"

    async with aiohttp.ClientSession() as session:
        with pytest.raises(ArchiveDecodeError):
            await CdxClient(session, archive_server.cdx_endpoint).fetch_timestamps(ROBOTS, 10)


@pytest.mark.asyncio()
async def test_fetch_timestamps_bad_status(archive_server):
    archive_server.index_status = 503

    async with aiohttp.ClientSession() as session:
        with pytest.raises(ArchiveNetworkError, match="503"):
            await CdxClient(session, archive_server.cdx_endpoint).fetch_timestamps(ROBOTS, 10)


@pytest.mark.asyncio()
async def test_fetch_timestamps_connection_refused(unused_tcp_port):
    async with aiohttp.ClientSession() as session:
        client = CdxClient(session, f"http://localhost:{unused_tcp_port}/cdx/search/cdx")
        with pytest.raises(ArchiveNetworkError):
            await client.fetch_timestamps(ROBOTS, 10)


@pytest.mark.asyncio()
async def test_snapshot_fetch_ok(archive_server):
    archive_server.add_capture("20150101000000", "Allow: /ok")
    entry = TimestampEntry("20150101000000", ROBOTS)

    async with aiohttp.ClientSession() as session:
        result = await SnapshotFetcher(session, 0, archive_server.replay_base).fetch(entry)

    assert result.ok
    assert result.body == "Allow: /ok"
    assert result.url.endswith("/20150101000000if_/http://example.com/robots.txt")
    assert archive_server.snapshot_requests[0][0] == "20150101000000if_"


@pytest.mark.asyncio()
async def test_snapshot_fetch_non_200_is_reported(archive_server):
    archive_server.add_capture("20150101000000", "gone", status=502)
    entry = TimestampEntry("20150101000000", ROBOTS)

    async with aiohttp.ClientSession() as session:
        result = await SnapshotFetcher(session, 0, archive_server.replay_base).fetch(entry)

    assert not result.ok
    assert isinstance(result.error, SnapshotFetchError)
    assert result.error.reason == "HTTP 502"
    assert result.body == ""


@pytest.mark.asyncio()
async def test_snapshot_fetch_transport_error_does_not_raise(unused_tcp_port):
    entry = TimestampEntry("20150101000000", ROBOTS)

    async with aiohttp.ClientSession() as session:
        fetcher = SnapshotFetcher(session, 0, f"http://localhost:{unused_tcp_port}/web")
        result = await fetcher.fetch(entry)

    assert not result.ok
    assert result.error.url == result.url


@pytest.mark.asyncio()
async def test_snapshot_fetch_sleeps_before_request(archive_server):
    archive_server.add_capture("20150101000000", "Allow: /ok")
    entry = TimestampEntry("20150101000000", ROBOTS)

    async with aiohttp.ClientSession() as session:
        start = time.monotonic()
        await SnapshotFetcher(session, 0.2, archive_server.replay_base).fetch(entry)

    requested_at = archive_server.snapshot_requests[0][1]
    assert requested_at - start >= 0.19
