"""
Client API externe (TMDB) utilise comme source distante.

Infrastructure:
- TMDBClient: implementation de IRemoteMovieSource (core/ports/api_clients.py)
- RateLimitError: Exception pour les erreurs 429
- with_retry / request_with_retry: relance avec backoff exponentiel sur 429
"""

from popcorn.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from popcorn.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "TMDBClient",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
