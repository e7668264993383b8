"""
Fixtures pytest partagees pour les tests Popcorn.

Ce module contient les fixtures communes utilisees dans les tests:
- Faux stockage en memoire et mock de la source distante
- Enregistrements de films types
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from popcorn.config import Settings
from popcorn.core.entities.movie import MovieCategory, MovieRecord
from popcorn.core.ports.api_clients import IRemoteMovieSource, MoviePage, RawMovie
from tests.fixtures.memory_store import InMemoryMovieStore


@pytest.fixture
def memory_store() -> InMemoryMovieStore:
    """Stockage local en memoire, vide."""
    return InMemoryMovieStore()


@pytest.fixture
def mock_remote() -> AsyncMock:
    """
    Mock de IRemoteMovieSource.

    Retourne des pages vides par defaut ; configurer return_value ou
    side_effect dans chaque test.
    """
    remote = AsyncMock(spec=IRemoteMovieSource)
    remote.fetch_category.return_value = MoviePage()
    remote.search.return_value = MoviePage()
    return remote


@pytest.fixture
def avatar_raw() -> RawMovie:
    """Avatar tel que retourne par l'API."""
    return RawMovie(
        id=19995,
        title="Avatar",
        original_title="Avatar",
        overview="A paraplegic Marine dispatched to the moon Pandora...",
        poster_path="/jRXYjXNq0Cs2TcJjLkki24MLp7u.jpg",
        release_date="2009-12-15",
        vote_average=7.6,
        vote_count=27000,
    )


@pytest.fixture
def inception_raw() -> RawMovie:
    """Inception tel que retourne par l'API."""
    return RawMovie(
        id=27205,
        title="Inception",
        original_title="Inception",
        release_date="2010-07-15",
        vote_average=8.4,
        vote_count=35000,
    )


@pytest.fixture
def cached_avatar() -> MovieRecord:
    """Avatar en cache dans les tendances, ancienne note, en favoris."""
    return MovieRecord(
        id=19995,
        category=MovieCategory.TRENDING,
        title="Avatar",
        release_date="2009-12-15",
        vote_average=7.2,
        vote_count=20000,
        is_bookmarked=True,
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec base et logs temporaires."""
    return Settings(
        tmdb_api_key="test_api_key",
        database_url=f"sqlite:///{tmp_path}/test.db",
        log_file=tmp_path / "test.log",
    )
