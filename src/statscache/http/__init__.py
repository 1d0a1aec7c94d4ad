"""HTTP client for the upstream stats API."""

from statscache.http.client import UpstreamClient, UpstreamResponse

__all__ = ["UpstreamClient", "UpstreamResponse"]
