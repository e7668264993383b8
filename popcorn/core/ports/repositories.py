"""
Interfaces ports pour le stockage local.

Le stockage local (LocalStore) est un cache persistant de MovieRecord indexe
par (id, categorie). Les operations sont asynchrones : l'implementation
SQLModel execute le travail SQLite hors de la boucle d'evenements.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Optional

from popcorn.core.entities.movie import MovieCategory, MovieRecord


class IMovieStore(ABC):
    """
    Interface de stockage des films en cache.

    Invariants :
    - au plus un enregistrement par (id, categorie)
    - le favori est partage par tous les enregistrements d'un meme id
    """

    @abstractmethod
    async def get_by_category(self, category: MovieCategory) -> list[MovieRecord]:
        """Instantane des films en cache pour une categorie."""
        ...

    @abstractmethod
    async def get_by_id(self, movie_id: int) -> Optional[MovieRecord]:
        """Recupere l'enregistrement le plus recent pour un id, ou None."""
        ...

    @abstractmethod
    async def upsert_many(self, records: list[MovieRecord]) -> None:
        """Insere ou met a jour plusieurs enregistrements."""
        ...

    @abstractmethod
    async def upsert_one(self, record: MovieRecord) -> None:
        """Insere ou met a jour un enregistrement."""
        ...

    @abstractmethod
    async def toggle_flag(self, movie_id: int) -> bool:
        """
        Inverse le favori d'un film existant.

        Returns:
            True si un enregistrement existait et a ete modifie, False sinon
            (aucun enregistrement n'est cree).
        """
        ...

    @abstractmethod
    async def is_bookmarked(self, movie_id: int) -> bool:
        """Lecture ponctuelle du favori (False si aucun enregistrement)."""
        ...

    @abstractmethod
    def observe_bookmarked(self) -> AsyncIterator[list[MovieRecord]]:
        """
        Flux continu des films en favoris.

        Emet la liste complete a l'abonnement puis a chaque modification
        du stockage.
        """
        ...

    @abstractmethod
    async def search_local(self, query: str) -> list[MovieRecord]:
        """Instantane des films en cache dont le titre contient la requete."""
        ...
