# File: robofinder/engine.py
"""robofinder.engine: orchestration of the index lookup, the snapshot loop and the extraction."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from robofinder.archive.cdx import CDX_ENDPOINT, CdxClient
from robofinder.archive.models import TimestampEntry
from robofinder.archive.snapshot import REPLAY_ENDPOINT, SnapshotFetcher
from robofinder.config import FinderConfig
from robofinder.logger import logger
from robofinder.parser.robots_parser import SeenRegister, extract

__all__ = ["Engine", "FinderReport", "build_session", "find_robots"]

Emit = Callable[[str], None]


@dataclass
class FinderReport:
    """Everything a run discovered, in discovery order."""

    target: str
    timestamps: List[TimestampEntry] = field(default_factory=list)
    paths: List[str] = field(default_factory=list)
    sitemaps: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Engine:
    """Runs one lookup: index phase, then every snapshot in index order."""

    def __init__(self, config: FinderConfig, cdx: CdxClient, fetcher: SnapshotFetcher) -> None:
        self.config = config
        self.cdx = cdx
        self.fetcher = fetcher
        self.paths = SeenRegister()
        self.sitemaps = SeenRegister()

    @classmethod
    def from_session(
        cls,
        config: FinderConfig,
        session: ClientSession,
        cdx_endpoint: str = CDX_ENDPOINT,
        replay_base: str = REPLAY_ENDPOINT,
    ) -> Engine:
        """Wire the archive clients onto a shared session."""
        return cls(
            config,
            CdxClient(session, cdx_endpoint),
            SnapshotFetcher(session, config.delay, replay_base),
        )

    async def run(self, on_path: Optional[Emit] = None, on_sitemap: Optional[Emit] = None) -> FinderReport:
        """
        Fetch the capture list, then scan each capture once.

        ``on_path`` / ``on_sitemap`` receive every new finding as soon as it
        is extracted, provided the matching output kind is enabled. Within one
        snapshot all new paths are emitted before its new sitemaps. Index
        errors propagate; snapshot errors are logged and skipped.
        """
        cfg = self.config
        entries = await self.cdx.fetch_timestamps(cfg.page_url, cfg.limit)
        report = FinderReport(target=cfg.base_domain, timestamps=list(entries))
        logger.info("Found [%d] Timestamps.", len(entries))

        logger.info("Fetching timestamps")
        for entry in entries:
            result = await self.fetcher.fetch(entry)
            if not result.ok:
                logger.debug("Error On Request: %s", result.error)
                report.failed.append(result.url)
                continue

            found = extract(result.body, cfg.base_domain, self.paths, self.sitemaps)
            if cfg.paths:
                for url in found.new_paths:
                    report.paths.append(url)
                    if on_path is not None:
                        on_path(url)
            if cfg.sitemaps:
                for sitemap in found.new_sitemaps:
                    report.sitemaps.append(sitemap)
                    if on_sitemap is not None:
                        on_sitemap(sitemap)

        if cfg.paths and not self.paths:
            logger.warning("No URL was found from robots.txt")
        if cfg.sitemaps and not self.sitemaps:
            logger.warning("No sitemap was found from robots.txt")

        return report


def build_session(config: FinderConfig) -> ClientSession:
    """HTTP session for one run; TLS verification follows ``config.verify_tls``."""
    if not config.verify_tls:
        logger.debug("TLS certificate verification is disabled")
    timeout = ClientTimeout(total=config.timeout or None)
    connector = TCPConnector(ssl=config.verify_tls)
    return ClientSession(connector=connector, timeout=timeout)


async def find_robots(
    config: FinderConfig,
    on_path: Optional[Emit] = None,
    on_sitemap: Optional[Emit] = None,
    *,
    cdx_endpoint: str = CDX_ENDPOINT,
    replay_base: str = REPLAY_ENDPOINT,
) -> FinderReport:
    """Open a session, run the Engine and close the session again."""
    async with build_session(config) as session:
        engine = Engine.from_session(config, session, cdx_endpoint, replay_base)
        return await engine.run(on_path, on_sitemap)
