"""Network retrieval of JSON Feeds."""

from .client import fetch_feed

__all__ = ["fetch_feed"]
