"""
Tests du cablage du container d'injection de dependances.
"""

import pytest

from popcorn.adapters.api.tmdb_client import TMDBClient
from popcorn.adapters.network.connectivity import ConnectivityObserver
from popcorn.config import Settings
from popcorn.container import Container
from popcorn.infrastructure.persistence.movie_store import SQLModelMovieStore
from popcorn.services.cache_coordinator import CacheCoordinator


@pytest.fixture
def container():
    container = Container()
    container.config.override(
        Settings(_env_file=None, tmdb_api_key="test_api_key", database_url="sqlite://")
    )
    container.database.init()
    yield container
    container.shutdown_resources()


class TestContainer:
    def test_coordinators_share_one_store(self, container):
        first = container.cache_coordinator()
        second = container.cache_coordinator()

        assert isinstance(first, CacheCoordinator)
        assert first is not second
        assert first._store is second._store
        assert isinstance(first._store, SQLModelMovieStore)
        assert isinstance(first._remote, TMDBClient)

    def test_observer_is_singleton(self, container):
        observer = container.connectivity_observer()
        assert isinstance(observer, ConnectivityObserver)
        assert observer is container.connectivity_observer()

    @pytest.mark.asyncio
    async def test_store_tables_are_created(self, container):
        store = container.movie_store()
        assert await store.get_by_id(1) is None
