"""
Coordinateur cache/reseau offline-first.

CacheCoordinator orchestre la source distante et le stockage local pour
chaque categorie de donnees. Chaque operation est un generateur asynchrone
qui emet une sequence ordonnee d'evenements Resource :

    Loading(None) -> [Loading(cache)] -> Success(frais) | Error(message, cache)

Responsabilites:
- Emettre le cache immediatement pendant la revalidation (stale-while-revalidate)
- Preserver le favori des films deja en cache lors d'un rafraichissement
- Se replier sur l'instantane du cache (ou la recherche locale) en cas d'echec
"""

from collections.abc import AsyncIterator
from typing import Optional

from loguru import logger

from popcorn.core.entities.movie import MovieCategory, MovieRecord
from popcorn.core.errors import error_message
from popcorn.core.ports.api_clients import IRemoteMovieSource
from popcorn.core.ports.repositories import IMovieStore
from popcorn.core.value_objects import Error, Loading, Resource, Success


class CacheCoordinator:
    """
    Service d'acces aux films avec strategie offline-first.

    Le stockage est passe explicitement pour pouvoir etre remplace par un
    faux en memoire dans les tests.

    Example:
        coordinator = CacheCoordinator(remote=tmdb_client, store=movie_store)
        async for resource in coordinator.fetch_trending():
            render(resource)
    """

    def __init__(self, remote: IRemoteMovieSource, store: IMovieStore) -> None:
        """
        Initialise le coordinateur.

        Args:
            remote: Source distante (client TMDB)
            store: Stockage local des films
        """
        self._remote = remote
        self._store = store

    async def fetch_category(
        self, category: MovieCategory
    ) -> AsyncIterator[Resource[list[MovieRecord]]]:
        """
        Recupere les films d'une categorie de liste.

        Args:
            category: MovieCategory.TRENDING ou MovieCategory.NOW_PLAYING

        Yields:
            Loading(None), Loading(cache) si le cache est non vide, puis
            Success(films fusionnes) ou Error(message, cache)

        Raises:
            ValueError: Si la categorie n'est pas une categorie de liste
        """
        if not category.is_listing:
            raise ValueError(f"Categorie non listable : {category.value}")

        yield Loading()

        cached = await self._store.get_by_category(category)
        if cached:
            yield Loading(cached)

        try:
            page = await self._remote.fetch_category(category)
            merged = []
            for raw in page.results:
                existing = await self._store.get_by_id(raw.id)
                is_bookmarked = existing.is_bookmarked if existing else False
                merged.append(raw.to_record(category, is_bookmarked))
            await self._store.upsert_many(merged)
        except Exception as e:
            message = error_message(e)
            logger.warning(
                "Echec du rafraichissement de categorie",
                category=category.value,
                error=message,
                cached=len(cached),
            )
            yield Error(message, cached if cached else None)
            return

        logger.debug("Categorie rafraichie", category=category.value, count=len(merged))
        yield Success(merged)

    def fetch_trending(self) -> AsyncIterator[Resource[list[MovieRecord]]]:
        """Films tendance de la semaine."""
        return self.fetch_category(MovieCategory.TRENDING)

    def fetch_now_playing(self) -> AsyncIterator[Resource[list[MovieRecord]]]:
        """Films actuellement en salle."""
        return self.fetch_category(MovieCategory.NOW_PLAYING)

    async def fetch_details(self, movie_id: int) -> AsyncIterator[Resource[MovieRecord]]:
        """
        Recupere les details complets d'un film.

        Le film rafraichi conserve le favori et la categorie de l'enregistrement
        en cache ; sans cache, il est range dans MovieCategory.DETAIL.

        Args:
            movie_id: ID TMDB du film

        Yields:
            Loading(None), Loading(cache) si present, puis Success ou Error
        """
        yield Loading()

        cached = await self._store.get_by_id(movie_id)
        if cached is not None:
            yield Loading(cached)

        try:
            raw = await self._remote.fetch_by_id(movie_id)
            record = raw.to_record(
                category=cached.category if cached else MovieCategory.DETAIL,
                is_bookmarked=cached.is_bookmarked if cached else False,
            )
            await self._store.upsert_one(record)
        except Exception as e:
            message = error_message(e)
            logger.warning(
                "Echec de recuperation des details",
                movie_id=movie_id,
                error=message,
                cached=cached is not None,
            )
            yield Error(message, cached)
            return

        yield Success(record)

    async def search(self, query: str) -> AsyncIterator[Resource[list[MovieRecord]]]:
        """
        Recherche des films par titre.

        Les resultats distants sont affiches tels quels : ni fusionnes avec les
        favoris, ni persistes. En cas d'echec, la recherche se replie sur les
        films en cache dont le titre correspond.

        Args:
            query: Texte recherche

        Yields:
            Success([]) seul pour une requete vide, sinon Loading(None) puis
            Success(resultats) ou Error(message, correspondances locales)
        """
        if not query.strip():
            yield Success([])
            return

        yield Loading()

        try:
            page = await self._remote.search(query)
        except Exception as e:
            message = error_message(e)
            local_matches = await self._store.search_local(query)
            logger.warning(
                "Echec de la recherche distante, repli local",
                query=query,
                error=message,
                local_matches=len(local_matches),
            )
            yield Error(message, local_matches if local_matches else None)
            return

        yield Success([raw.to_record(MovieCategory.SEARCH) for raw in page.results])

    async def toggle_bookmark(self, movie_id: int) -> bool:
        """
        Inverse le favori d'un film en cache.

        Returns:
            True si le film existait, False sinon (aucun enregistrement cree)
        """
        toggled = await self._store.toggle_flag(movie_id)
        if not toggled:
            logger.debug("Favori ignore : film absent du cache", movie_id=movie_id)
        return toggled

    async def is_bookmarked(self, movie_id: int) -> bool:
        """Indique si un film est en favoris (False s'il est absent du cache)."""
        return await self._store.is_bookmarked(movie_id)

    def observe_bookmarked(self) -> AsyncIterator[list[MovieRecord]]:
        """Flux continu de la liste complete des films en favoris."""
        return self._store.observe_bookmarked()

    async def get_cached(self, movie_id: int) -> Optional[MovieRecord]:
        """Lecture ponctuelle d'un film en cache, sans appel reseau."""
        return await self._store.get_by_id(movie_id)
