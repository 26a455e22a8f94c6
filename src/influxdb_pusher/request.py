"""Write request construction."""

from __future__ import annotations

from typing import Dict
from urllib.parse import urlsplit

from requests.exceptions import RequestException
from requests.models import PreparedRequest

from .config import PusherConfig, write_endpoint
from .exceptions import BadRequestError

__all__ = ["QUERY_KEYS", "build_write_url", "query_params", "redact_url", "write_endpoint"]

# Query key -> PusherConfig attribute, in emitted order.
QUERY_KEYS = (
    ("db", "database"),
    ("consistency", "consistency"),
    ("u", "username"),
    ("p", "password"),
    ("precision", "precision"),
    ("rp", "retention_policy"),
)


def query_params(config: PusherConfig) -> Dict[str, str]:
    """Query parameters for config; unset values produce no key at all."""
    params: Dict[str, str] = {}
    for key, attr in QUERY_KEYS:
        value = getattr(config, attr)
        if value:
            params[key] = value
    return params


def build_write_url(config: PusherConfig) -> str:
    """Absolute write URL with the configured query string."""
    _check_base_url(config.base_url)
    prepared = PreparedRequest()
    try:
        prepared.prepare_url(config.base_url, query_params(config))
    except RequestException as exc:
        raise BadRequestError(f"error when parsing URL '{config.base_url}': {exc}") from exc
    return prepared.url


def _check_base_url(url: str) -> None:
    # prepare_url passes non-HTTP schemes through untouched and turns
    # "http:///write" into host "write".
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError as exc:
        raise BadRequestError(f"error when parsing URL '{url}': {exc}") from exc
    if parts.scheme not in ("http", "https"):
        raise BadRequestError(f"error when parsing URL '{url}': unsupported scheme")
    if not host:
        raise BadRequestError(f"error when parsing URL '{url}': no host")


def redact_url(url: str, config: PusherConfig) -> str:
    """url with the password query value masked, for logging."""
    if not config.password:
        return url
    prepared = PreparedRequest()
    prepared.prepare_url(config.base_url, {**query_params(config), "p": "xxxxx"})
    return prepared.url
