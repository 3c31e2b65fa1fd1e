"""
Loading and validation of RoboFinder run options.

Options come from the command line and, optionally, from a YAML/JSON file
with the same keys. Pydantic describes the schema; the usage rules of the
original tool (URL shape, mutually exclusive switches) live in a model
validator and raise :class:`~robofinder.errors.OptionsError`.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from robofinder.errors import OptionsError

__all__ = ["FinderConfig", "check_options", "load_config", "read_config_file", "robots_url"]

MAX_URL_SLASHES = 3


def robots_url(base_domain: str) -> str:
    """Page URL whose captures are looked up in the archive."""
    return f"{base_domain}/robots.txt"


class FinderConfig(BaseModel):
    """Options for a single RoboFinder run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field("", description="Target base URL, scheme://domain.tld")
    delay: float = Field(0.5, ge=0, description="Pause before each snapshot request (seconds).")
    limit: int = Field(10, description="CDX result limit; negative values select the most recent N.")
    paths: bool = Field(False, description="Print discovered robots.txt paths.")
    sitemaps: bool = Field(False, description="Print discovered sitemap URLs.")
    silent: bool = Field(False, description="Suppress every line except the findings.")
    verbose: bool = Field(False, description="Print debug lines.")
    timeout: float = Field(30.0, ge=0, description="Per-request timeout (seconds), 0 disables it.")
    verify_tls: bool = Field(False, description="Verify TLS certificates of the archive.")

    @model_validator(mode="after")
    def _check_usage(self) -> FinderConfig:
        # OptionsError is not a ValueError, so pydantic lets it through unwrapped
        check_options(self)
        return self

    @property
    def base_domain(self) -> str:
        """``url`` without its trailing slash."""
        if self.url.endswith("/"):
            return self.url[:-1]
        return self.url

    @property
    def page_url(self) -> str:
        return robots_url(self.base_domain)


def check_options(cfg: FinderConfig) -> None:
    """Apply the usage rules in the order the messages are expected."""
    if cfg.url == "":
        raise OptionsError("Enter URL in following format: scheme://domain.tld")

    if not cfg.url.lower().startswith("http"):
        raise OptionsError("Enter URL with its scheme. (http|https)")

    if cfg.url.count("/") > MAX_URL_SLASHES:
        raise OptionsError("Only enter domain name, not full URL\nFormat: scheme://domain.tld")

    if cfg.silent and cfg.verbose:
        raise OptionsError("Cannot use -s with -v at the same time.")

    if not cfg.paths and not cfg.sitemaps:
        raise OptionsError("Either use -p or -sm in order to extract data.")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read option defaults from a YAML or JSON file.
    Raises FileNotFoundError when the file is missing.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    # allow "verify-tls" style keys, as written on the command line
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> FinderConfig:
    """
    Build a validated FinderConfig.

    Values from ``overrides`` (normally the options given on the command
    line) take precedence over the ones read from ``path``.
    """
    data: Dict[str, Any] = read_config_file(path) if path is not None else {}
    if overrides:
        data.update(overrides)
    return FinderConfig(**data)
