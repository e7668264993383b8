"""
Tests pour CacheCoordinator - strategie offline-first.

Tests couvrant:
- Ordre des evenements (Loading avant l'unique evenement terminal)
- Repli sur l'instantane du cache en cas d'echec reseau
- Preservation des favoris lors d'un rafraichissement
- Details : categorie et favori herites du cache
- Recherche : requete vide, resultats non persistes, repli local
- Favoris : bascule, lecture ponctuelle, flux push
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from popcorn.core.entities.movie import MovieCategory, MovieRecord
from popcorn.core.errors import NO_CONNECTION_MESSAGE, NOT_FOUND_MESSAGE, SERVER_ERROR_MESSAGE
from popcorn.core.ports.api_clients import (
    ConnectivityError,
    HttpStatusError,
    MoviePage,
    RawMovie,
)
from popcorn.core.ports.repositories import IMovieStore
from popcorn.core.value_objects import Error, Loading, Success
from popcorn.services.cache_coordinator import CacheCoordinator


async def collect(stream) -> list:
    """Consomme un flux d'evenements jusqu'a sa fin."""
    return [event async for event in stream]


@pytest.fixture
def coordinator(mock_remote, memory_store) -> CacheCoordinator:
    return CacheCoordinator(remote=mock_remote, store=memory_store)


# ============================================================================
# fetch_category
# ============================================================================


class TestFetchCategoryOrdering:
    """Sequence d'evenements de fetch_category."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("category", [MovieCategory.TRENDING, MovieCategory.NOW_PLAYING])
    async def test_empty_cache_success_emits_loading_then_success(
        self, coordinator, mock_remote, avatar_raw, category
    ):
        mock_remote.fetch_category.return_value = MoviePage(results=[avatar_raw])

        events = await collect(coordinator.fetch_category(category))

        assert len(events) == 2
        assert events[0] == Loading()
        assert isinstance(events[1], Success)
        assert [m.id for m in events[1].data] == [19995]
        assert events[1].data[0].category == category
        mock_remote.fetch_category.assert_awaited_once_with(category)

    @pytest.mark.asyncio
    async def test_cached_data_emitted_as_second_loading(
        self, coordinator, mock_remote, memory_store, cached_avatar, avatar_raw
    ):
        memory_store.seed(cached_avatar)
        mock_remote.fetch_category.return_value = MoviePage(results=[avatar_raw])

        events = await collect(coordinator.fetch_trending())

        assert [type(e) for e in events] == [Loading, Loading, Success]
        assert events[0].data is None
        assert events[1].data == [cached_avatar]

    @pytest.mark.asyncio
    async def test_exactly_one_terminal_event_on_failure(self, coordinator, mock_remote):
        mock_remote.fetch_category.side_effect = ConnectivityError("down")

        events = await collect(coordinator.fetch_now_playing())

        terminal = [e for e in events if e.is_terminal]
        assert len(terminal) == 1
        assert events[-1] is terminal[0]
        assert all(isinstance(e, Loading) for e in events[:-1])

    @pytest.mark.asyncio
    async def test_rejects_non_listing_category(self, coordinator):
        with pytest.raises(ValueError):
            await collect(coordinator.fetch_category(MovieCategory.DETAIL))


class TestFetchCategoryFallback:
    """Repli sur le cache en cas d'echec."""

    @pytest.mark.asyncio
    async def test_failure_with_cache_returns_pre_fetch_snapshot(
        self, coordinator, mock_remote, memory_store
    ):
        cached = [
            MovieRecord(id=1, category=MovieCategory.TRENDING, title="One"),
            MovieRecord(id=2, category=MovieCategory.TRENDING, title="Two", is_bookmarked=True),
        ]
        memory_store.seed(*cached)
        mock_remote.fetch_category.side_effect = ConnectivityError("down")

        events = await collect(coordinator.fetch_trending())

        assert events[-1] == Error(NO_CONNECTION_MESSAGE, cached)

    @pytest.mark.asyncio
    async def test_failure_without_cache_carries_no_data(self, coordinator, mock_remote):
        mock_remote.fetch_category.side_effect = HttpStatusError(503)

        events = await collect(coordinator.fetch_trending())

        assert events == [Loading(), Error(SERVER_ERROR_MESSAGE, None)]

    @pytest.mark.asyncio
    async def test_fallback_snapshot_is_not_reread_after_failure(
        self, coordinator, mock_remote, memory_store, cached_avatar
    ):
        memory_store.seed(cached_avatar)

        async def fail_after_cache_change(category):
            # Une ecriture concurrente pendant l'appel reseau
            await memory_store.upsert_one(
                MovieRecord(id=42, category=MovieCategory.TRENDING, title="Late")
            )
            raise ConnectivityError("down")

        mock_remote.fetch_category.side_effect = fail_after_cache_change

        events = await collect(coordinator.fetch_trending())

        assert events[-1].data == [cached_avatar]

    @pytest.mark.asyncio
    async def test_unclassified_error_uses_its_description(self, coordinator, mock_remote):
        mock_remote.fetch_category.side_effect = RuntimeError("boom")

        events = await collect(coordinator.fetch_trending())

        assert events[-1] == Error("boom", None)


class TestBookmarkMerge:
    """Preservation du favori lors des rafraichissements."""

    @pytest.mark.asyncio
    async def test_refetch_keeps_bookmark_and_updates_metadata(
        self, coordinator, mock_remote, memory_store, cached_avatar, avatar_raw
    ):
        memory_store.seed(cached_avatar)
        mock_remote.fetch_category.return_value = MoviePage(results=[avatar_raw])

        events = await collect(coordinator.fetch_trending())

        fresh = events[-1].data[0]
        assert fresh.is_bookmarked is True
        assert fresh.vote_average == 7.6
        assert fresh.vote_count == 27000
        stored = await memory_store.get_by_id(19995)
        assert stored.is_bookmarked is True
        assert stored.vote_average == 7.6

    @pytest.mark.asyncio
    async def test_new_ids_default_to_not_bookmarked(
        self, coordinator, mock_remote, avatar_raw, inception_raw, memory_store
    ):
        mock_remote.fetch_category.return_value = MoviePage(results=[avatar_raw, inception_raw])

        events = await collect(coordinator.fetch_now_playing())

        assert [m.is_bookmarked for m in events[-1].data] == [False, False]
        assert len(memory_store.upserted) == 2

    @pytest.mark.asyncio
    async def test_bookmark_from_other_category_is_preserved(
        self, coordinator, mock_remote, memory_store, avatar_raw
    ):
        memory_store.seed(
            MovieRecord(id=19995, category=MovieCategory.DETAIL, title="Avatar", is_bookmarked=True)
        )
        mock_remote.fetch_category.return_value = MoviePage(results=[avatar_raw])

        events = await collect(coordinator.fetch_now_playing())

        assert events[-1].data[0].is_bookmarked is True
        assert events[-1].data[0].category == MovieCategory.NOW_PLAYING


# ============================================================================
# fetch_details
# ============================================================================


class TestFetchDetails:
    """Tests pour fetch_details."""

    @pytest.mark.asyncio
    async def test_uncached_success_is_tagged_detail(self, coordinator, mock_remote, avatar_raw):
        mock_remote.fetch_by_id.return_value = avatar_raw

        events = await collect(coordinator.fetch_details(19995))

        assert events[0] == Loading()
        assert isinstance(events[1], Success)
        assert events[1].data.category == MovieCategory.DETAIL
        assert events[1].data.is_bookmarked is False

    @pytest.mark.asyncio
    async def test_cached_record_keeps_category_and_bookmark(
        self, coordinator, mock_remote, memory_store, cached_avatar
    ):
        memory_store.seed(cached_avatar)
        mock_remote.fetch_by_id.return_value = RawMovie(
            id=19995, title="Avatar", runtime=162, tagline="Enter the world of Pandora."
        )

        events = await collect(coordinator.fetch_details(19995))

        assert events[1] == Loading(cached_avatar)
        merged = events[2].data
        assert merged.category == MovieCategory.TRENDING
        assert merged.is_bookmarked is True
        assert merged.runtime == 162
        assert memory_store.upserted == [merged]

    @pytest.mark.asyncio
    async def test_failure_returns_cached_record(
        self, coordinator, mock_remote, memory_store, cached_avatar
    ):
        memory_store.seed(cached_avatar)
        mock_remote.fetch_by_id.side_effect = HttpStatusError(404)

        events = await collect(coordinator.fetch_details(19995))

        assert events[-1] == Error(NOT_FOUND_MESSAGE, cached_avatar)

    @pytest.mark.asyncio
    async def test_failure_without_cache(self, coordinator, mock_remote):
        mock_remote.fetch_by_id.side_effect = ConnectivityError("down")

        events = await collect(coordinator.fetch_details(1))

        assert events == [Loading(), Error(NO_CONNECTION_MESSAGE, None)]


# ============================================================================
# search
# ============================================================================


class TestSearch:
    """Tests pour search."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    async def test_blank_query_emits_only_empty_success(self, mock_remote, query):
        store = MagicMock(spec=IMovieStore)
        coordinator = CacheCoordinator(remote=mock_remote, store=store)

        events = await collect(coordinator.search(query))

        assert events == [Success([])]
        mock_remote.search.assert_not_called()
        assert store.method_calls == []

    @pytest.mark.asyncio
    async def test_results_are_neither_merged_nor_persisted(
        self, coordinator, mock_remote, memory_store, cached_avatar, avatar_raw
    ):
        memory_store.seed(cached_avatar)
        mock_remote.search.return_value = MoviePage(results=[avatar_raw])

        events = await collect(coordinator.search("Avatar"))

        assert events[0] == Loading()
        result = events[1].data[0]
        assert result.category == MovieCategory.SEARCH
        assert result.is_bookmarked is False
        assert memory_store.upserted == []

    @pytest.mark.asyncio
    async def test_failure_falls_back_to_local_matches(
        self, coordinator, mock_remote, memory_store, cached_avatar
    ):
        memory_store.seed(
            cached_avatar,
            MovieRecord(id=27205, category=MovieCategory.NOW_PLAYING, title="Inception"),
        )
        mock_remote.search.side_effect = ConnectivityError("down")

        events = await collect(coordinator.search("avat"))

        assert events == [Loading(), Error(NO_CONNECTION_MESSAGE, [cached_avatar])]

    @pytest.mark.asyncio
    async def test_failure_without_local_matches(self, coordinator, mock_remote):
        mock_remote.search.side_effect = HttpStatusError(418)

        events = await collect(coordinator.search("Avatar"))

        assert events[-1] == Error("Unexpected error occurred (418).", None)


# ============================================================================
# Favoris
# ============================================================================


class TestBookmarks:
    """Tests pour les operations de favoris."""

    @pytest.mark.asyncio
    async def test_toggle_flips_existing_record(self, coordinator, memory_store, cached_avatar):
        memory_store.seed(cached_avatar)

        assert await coordinator.toggle_bookmark(19995) is True
        assert await coordinator.is_bookmarked(19995) is False
        assert await coordinator.toggle_bookmark(19995) is True
        assert await coordinator.is_bookmarked(19995) is True

    @pytest.mark.asyncio
    async def test_toggle_missing_record_is_noop(self, coordinator, memory_store):
        assert await coordinator.toggle_bookmark(999) is False
        assert await memory_store.get_by_id(999) is None
        assert await coordinator.is_bookmarked(999) is False

    @pytest.mark.asyncio
    async def test_observe_bookmarked_pushes_on_change(
        self, coordinator, memory_store, cached_avatar
    ):
        memory_store.seed(
            cached_avatar,
            MovieRecord(id=27205, category=MovieCategory.NOW_PLAYING, title="Inception"),
        )
        stream = coordinator.observe_bookmarked()
        try:
            first = await anext(stream)
            assert [m.id for m in first] == [19995]

            await coordinator.toggle_bookmark(27205)
            second = await asyncio.wait_for(anext(stream), timeout=1)
            assert sorted(m.id for m in second) == [19995, 27205]

            await coordinator.toggle_bookmark(19995)
            third = await asyncio.wait_for(anext(stream), timeout=1)
            assert [m.id for m in third] == [27205]
        finally:
            await stream.aclose()

        assert memory_store.notifier.listener_count == 0

    @pytest.mark.asyncio
    async def test_get_cached_does_not_hit_network(self, coordinator, mock_remote, memory_store, cached_avatar):
        memory_store.seed(cached_avatar)

        assert await coordinator.get_cached(19995) == cached_avatar
        mock_remote.fetch_by_id.assert_not_called()
