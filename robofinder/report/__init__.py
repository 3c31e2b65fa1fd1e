"""robofinder.report: writing run results to disk."""

from .json_report import render_json

__all__ = ["render_json"]
