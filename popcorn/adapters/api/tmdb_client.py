"""
Client TMDB : source distante des listes, details et recherches de films.

Implemente l'interface IRemoteMovieSource pour TMDB (The Movie Database).
Le client ne met rien en cache : la mise en cache est la responsabilite du
CacheCoordinator et du stockage local.

Les erreurs httpx sont converties a la frontiere :
- httpx.TransportError -> ConnectivityError
- httpx.HTTPStatusError / RateLimitError -> HttpStatusError

Usage:
    client = TMDBClient(api_key="your_key")
    page = await client.fetch_category(MovieCategory.TRENDING)
    movie = await client.fetch_by_id(550)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from popcorn.adapters.api.retry import RateLimitError, request_with_retry
from popcorn.core.entities.movie import MovieCategory
from popcorn.core.ports.api_clients import (
    ConnectivityError,
    HttpStatusError,
    IRemoteMovieSource,
    MoviePage,
    RawMovie,
)
from popcorn.utils.constants import CATEGORY_ENDPOINTS, TMDB_GENRE_MAPPING


class TMDBClient(IRemoteMovieSource):
    """
    Client API TMDB.

    Implemente IRemoteMovieSource avec:
    - Listes tendance (semaine) et a l'affiche
    - Details complets d'un film
    - Recherche par titre
    - Retry automatique sur rate limiting (429)

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3 par defaut

    Example:
        client = TMDBClient(api_key="xxx")
        page = await client.search("Inception")
        for movie in page.results:
            print(f"{movie.title} ({movie.release_date})")
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = TMDB_BASE_URL,
        language: str = "en-US",
        timeout: float = 30.0,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 ou Read Access Token v4
            base_url: URL de base de l'API
            language: Langue des metadonnees (ex: "en-US", "fr-FR")
            timeout: Timeout HTTP en secondes
            max_attempts: Tentatives maximales sur 429
        """
        self._api_key = api_key or ""
        self._base_url = base_url
        self._language = language
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passee en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            elif self._api_key:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> dict:
        """
        Effectue un GET et retourne le corps JSON.

        Raises:
            ConnectivityError: Aucun transport joignable
            HttpStatusError: Le serveur a repondu en erreur
        """
        query = {"language": self._language, **(params or {})}
        try:
            response = await request_with_retry(
                self._get_client(),
                "GET",
                path,
                max_attempts=self._max_attempts,
                params=query,
            )
        except httpx.HTTPStatusError as e:
            logger.debug("Erreur HTTP TMDB", path=path, status=e.response.status_code)
            raise HttpStatusError(e.response.status_code, str(e)) from e
        except RateLimitError as e:
            logger.debug("Rate limit TMDB epuise", path=path)
            raise HttpStatusError(e.status_code, str(e)) from e
        except httpx.TransportError as e:
            logger.debug("TMDB injoignable", path=path, error=repr(e))
            raise ConnectivityError(str(e) or type(e).__name__) from e
        return response.json()

    @staticmethod
    def _parse_movie(item: dict) -> RawMovie:
        """Convertit un objet film JSON (liste ou details) en RawMovie."""
        if "genres" in item:
            genres = tuple(g.get("name", "") for g in item.get("genres") or [] if g.get("name"))
        else:
            genres = tuple(
                TMDB_GENRE_MAPPING[gid]
                for gid in item.get("genre_ids") or []
                if gid in TMDB_GENRE_MAPPING
            )

        localized_title = item.get("title") or ""
        original_title = item.get("original_title") or None

        return RawMovie(
            id=int(item["id"]),
            title=localized_title or original_title or "",
            original_title=original_title,
            overview=item.get("overview") or None,
            poster_path=item.get("poster_path"),
            backdrop_path=item.get("backdrop_path"),
            release_date=item.get("release_date") or None,
            vote_average=item.get("vote_average"),
            vote_count=item.get("vote_count"),
            popularity=item.get("popularity"),
            original_language=item.get("original_language"),
            genres=genres,
            runtime=item.get("runtime") or None,
            tagline=item.get("tagline") or None,
        )

    def _parse_page(self, data: dict) -> MoviePage:
        """Convertit une reponse paginee TMDB en MoviePage."""
        results = [self._parse_movie(item) for item in data.get("results", [])]
        return MoviePage(
            results=results,
            page=data.get("page", 1),
            total_pages=data.get("total_pages", 1),
            total_results=data.get("total_results", len(results)),
        )

    async def fetch_category(self, category: MovieCategory) -> MoviePage:
        """
        Recupere la premiere page d'une categorie de liste.

        Args:
            category: MovieCategory.TRENDING ou MovieCategory.NOW_PLAYING

        Raises:
            ValueError: Si la categorie n'a pas d'endpoint de liste
        """
        endpoint = CATEGORY_ENDPOINTS.get(category)
        if endpoint is None:
            raise ValueError(f"Pas d'endpoint TMDB pour la categorie {category.value}")
        data = await self._get_json(endpoint)
        return self._parse_page(data)

    async def fetch_by_id(self, movie_id: int) -> RawMovie:
        """Recupere les details complets d'un film (genres, duree, tagline)."""
        data = await self._get_json(f"/movie/{movie_id}")
        return self._parse_movie(data)

    async def search(self, query: str) -> MoviePage:
        """Recherche des films par titre (contenu adulte exclu)."""
        data = await self._get_json(
            "/search/movie",
            {"query": query, "include_adult": "false"},
        )
        return self._parse_page(data)

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
