"""robofinder.parser: line-oriented extraction of paths and sitemaps from robots.txt snapshots."""

from .robots_parser import Extraction, SeenRegister, canonical_path, extract

__all__ = ["Extraction", "SeenRegister", "canonical_path", "extract"]
