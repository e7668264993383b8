"""
Interfaces ports pour la source distante de films.

Interfaces abstraites (ports) definissant le contrat de la source distante
(RemoteSource). L'implementation concrete est le client TMDB
(adapters/api/tmdb_client.py).

Toute defaillance est signalee par une sous-classe de RemoteSourceError :
- ConnectivityError : aucun transport joignable
- HttpStatusError : la requete a abouti mais le serveur a repondu en erreur
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from popcorn.core.entities.movie import MovieCategory, MovieRecord


class RemoteSourceError(Exception):
    """Erreur de base levee a la frontiere de la source distante."""


class ConnectivityError(RemoteSourceError):
    """Aucun transport reseau n'a pu etre etabli."""


class HttpStatusError(RemoteSourceError):
    """
    Le serveur a repondu avec un code HTTP d'erreur.

    Attributes:
        status_code: Code HTTP retourne par le serveur
    """

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"HTTP {status_code}")


@dataclass
class RawMovie:
    """
    Film tel que retourne par l'API distante, avant fusion avec le cache.

    Les champs genres, runtime et tagline ne sont renseignes que par
    l'endpoint de details.
    """

    id: int
    title: str = ""
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    popularity: Optional[float] = None
    original_language: Optional[str] = None
    genres: tuple[str, ...] = ()
    runtime: Optional[int] = None
    tagline: Optional[str] = None

    def to_record(self, category: MovieCategory, is_bookmarked: bool = False) -> MovieRecord:
        """Convertit en MovieRecord pour la categorie et le favori donnes."""
        return MovieRecord(
            id=self.id,
            category=category,
            title=self.title,
            original_title=self.original_title,
            overview=self.overview,
            poster_path=self.poster_path,
            backdrop_path=self.backdrop_path,
            release_date=self.release_date,
            vote_average=self.vote_average,
            vote_count=self.vote_count,
            popularity=self.popularity,
            original_language=self.original_language,
            genres=self.genres,
            runtime=self.runtime,
            tagline=self.tagline,
            is_bookmarked=is_bookmarked,
        )


@dataclass
class MoviePage:
    """Page de resultats retournee par les endpoints de liste et de recherche."""

    results: list[RawMovie] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_results: int = 0


class IRemoteMovieSource(ABC):
    """
    Source distante sans etat des films.

    Chaque appel leve ConnectivityError ou HttpStatusError en cas d'echec.
    """

    @abstractmethod
    async def fetch_category(self, category: MovieCategory) -> MoviePage:
        """
        Recupere la liste des films d'une categorie.

        Args:
            category: MovieCategory.TRENDING ou MovieCategory.NOW_PLAYING

        Returns:
            Page de resultats bruts
        """
        ...

    @abstractmethod
    async def fetch_by_id(self, movie_id: int) -> RawMovie:
        """Recupere les details complets d'un film."""
        ...

    @abstractmethod
    async def search(self, query: str) -> MoviePage:
        """Recherche des films par titre."""
        ...
