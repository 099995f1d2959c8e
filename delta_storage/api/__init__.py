"""
Delta Storage API client layer.

Provides async HTTP communication with the Delta Storage API.
"""

from delta_storage.api.http_client import AsyncHttpClient, sanitize_for_log

__all__ = ["AsyncHttpClient", "sanitize_for_log"]
