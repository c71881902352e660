"""Per-audit resource fetching."""

from .http_client import TIMEOUT_ERROR, Fetcher, normalize_headers

__all__ = ["Fetcher", "TIMEOUT_ERROR", "normalize_headers"]
