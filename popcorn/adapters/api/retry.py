"""
Relance avec backoff exponentiel pour l'API TMDB.

Les reponses 429 (rate limiting) sont converties en RateLimitError puis
relancees avec un delai croissant et du jitter aleatoire. Les autres codes
d'erreur sont propages immediatement.

Usage:
    response = await request_with_retry(client, "GET", "/movie/550")
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Secondes a attendre (header Retry-After), ou None
    """

    status_code = 429

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _log_retry(retry_state: RetryCallState) -> None:
    """Journalise chaque nouvelle tentative."""
    logger.debug(
        "Rate limit TMDB, nouvelle tentative",
        attempt=retry_state.attempt_number,
        wait=round(retry_state.next_action.sleep, 2) if retry_state.next_action else None,
    )


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur relancant une fonction async sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur tenacity ; la derniere RateLimitError est relevee telle quelle
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes ; None si absent ou au format date HTTP."""
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec relance automatique sur 429.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (relative a base_url du client)
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre tentatives (secondes)
        **kwargs: Arguments passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Si aucune connexion n'a pu etre etablie
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()
