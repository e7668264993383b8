"""
Modeles SQLModel pour la base de donnees Popcorn.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- movies: Films en cache, une ligne par (id TMDB, categorie)
- bookmarks: Favori par id TMDB, partage par toutes les categories

Le champ genres_json stocke la liste des genres serialisee en JSON.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Horodatage UTC avec fuseau (les colonnes updated_at l'exigent)."""
    return datetime.now(timezone.utc)


class MovieModel(SQLModel, table=True):
    """
    Modele representant un film en cache.

    La cle primaire composite (id, category) garantit au plus une ligne
    par film et par categorie.
    """

    __tablename__ = "movies"

    id: int = Field(primary_key=True)
    category: str = Field(primary_key=True, index=True)
    title: str = Field(default="", index=True)
    original_title: str | None = None
    overview: str | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None  # YYYY-MM-DD
    vote_average: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    original_language: str | None = None
    genres_json: str | None = None  # JSON: ["Action", "Science Fiction"]
    runtime: int | None = None  # minutes
    tagline: str | None = None
    position: int = Field(default=0)  # rang dans la reponse de l'API
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), index=True
    )

    @property
    def genres(self) -> list[str]:
        """Retourne les genres deserialises."""
        if self.genres_json:
            return json.loads(self.genres_json)
        return []

    @genres.setter
    def genres(self, value: list[str]) -> None:
        """Serialise les genres en JSON."""
        self.genres_json = json.dumps(value) if value else None


class BookmarkModel(SQLModel, table=True):
    """Favori d'un film, independant de la categorie."""

    __tablename__ = "bookmarks"

    movie_id: int = Field(primary_key=True)
    is_bookmarked: bool = Field(default=False, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
