# File: robofinder/errors.py
"""robofinder.errors: exception hierarchy shared by the archive client, the engine and the CLI."""

from __future__ import annotations

__all__ = [
    "RoboFinderError",
    "OptionsError",
    "ArchiveError",
    "ArchiveNetworkError",
    "ArchiveDecodeError",
    "SnapshotFetchError",
]


class RoboFinderError(Exception):
    """Base class for every error raised by RoboFinder."""


class OptionsError(RoboFinderError):
    """Invalid command-line or config-file options. Always fatal."""


class ArchiveError(RoboFinderError):
    """Failure while talking to the archive's CDX index."""


class ArchiveNetworkError(ArchiveError):
    """Transport failure, timeout or bad HTTP status from the index endpoint."""


class ArchiveDecodeError(ArchiveError):
    """Index payload is not JSON or has rows with fewer than two columns."""


class SnapshotFetchError(RoboFinderError):
    """A single archived snapshot could not be fetched; the run continues."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
