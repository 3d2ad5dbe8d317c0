"""
Transport HTTP des sources : session, cache de pages et relance sur 429.
"""

from src.adapters.http.cache import PageCache
from src.adapters.http.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.http.session import ScrapeSession, ScrapeSessionFactory

__all__ = [
    "PageCache",
    "RateLimitError",
    "ScrapeSession",
    "ScrapeSessionFactory",
    "request_with_retry",
    "with_retry",
]
