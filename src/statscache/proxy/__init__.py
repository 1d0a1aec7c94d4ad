"""Refresh logic that fronts the upstream stats API."""

from statscache.proxy.service import (
    DEFAULT_CONTENT_TYPE,
    ProxyResponse,
    StatsProxy,
    create_proxy,
)

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "ProxyResponse",
    "StatsProxy",
    "create_proxy",
]
