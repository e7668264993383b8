"""
Commandes CLI de consultation des films et des favoris.

Chaque commande de recuperation affiche tous les evenements Resource au fur
et a mesure de leur emission, puis sort avec le code 1 si l'evenement
terminal est une erreur.
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Annotated

import typer

from popcorn.adapters.cli.helpers import console, render_movies, render_resource, with_container
from popcorn.core.value_objects import Error, Resource


async def _consume(container, stream: AsyncIterator[Resource], label: str) -> bool:
    """
    Affiche chaque evenement du flux et ferme le client HTTP.

    Returns:
        True si l'evenement terminal est un succes
    """
    ok = True
    try:
        async for resource in stream:
            render_resource(resource, label)
            if isinstance(resource, Error):
                ok = False
    finally:
        await container.tmdb_client().close()
    return ok


def _exit_on_failure(ok: bool) -> None:
    if not ok:
        raise typer.Exit(code=1)


def trending() -> None:
    """Affiche les films tendance de la semaine."""
    _exit_on_failure(asyncio.run(_trending_async()))


@with_container()
async def _trending_async(container) -> bool:
    coordinator = container.cache_coordinator()
    return await _consume(container, coordinator.fetch_trending(), "Tendances")


def now_playing() -> None:
    """Affiche les films actuellement a l'affiche."""
    _exit_on_failure(asyncio.run(_now_playing_async()))


@with_container()
async def _now_playing_async(container) -> bool:
    coordinator = container.cache_coordinator()
    return await _consume(container, coordinator.fetch_now_playing(), "A l'affiche")


def details(
    movie_id: Annotated[int, typer.Argument(help="ID TMDB du film")],
) -> None:
    """Affiche les details d'un film."""
    _exit_on_failure(asyncio.run(_details_async(movie_id)))


@with_container()
async def _details_async(container, movie_id: int) -> bool:
    coordinator = container.cache_coordinator()
    return await _consume(container, coordinator.fetch_details(movie_id), "Details")


def search(
    query: Annotated[str, typer.Argument(help="Titre recherche")],
) -> None:
    """Recherche des films par titre (repli sur le cache hors ligne)."""
    _exit_on_failure(asyncio.run(_search_async(query)))


@with_container()
async def _search_async(container, query: str) -> bool:
    coordinator = container.cache_coordinator()
    return await _consume(container, coordinator.search(query), f"Recherche '{query}'")


def bookmark(
    movie_id: Annotated[int, typer.Argument(help="ID TMDB du film")],
) -> None:
    """Ajoute ou retire un film des favoris."""
    asyncio.run(_bookmark_async(movie_id))


@with_container()
async def _bookmark_async(container, movie_id: int) -> None:
    coordinator = container.cache_coordinator()
    if not await coordinator.toggle_bookmark(movie_id):
        console.print(f"[yellow]Film {movie_id} absent du cache.[/yellow]")
        console.print("[dim]Consultez ses details pour l'ajouter au cache.[/dim]")
        return
    if await coordinator.is_bookmarked(movie_id):
        console.print(f"[green]Film {movie_id} ajoute aux favoris.[/green]")
    else:
        console.print(f"Film {movie_id} retire des favoris.")


def bookmarks() -> None:
    """Affiche les films en favoris."""
    asyncio.run(_bookmarks_async())


@with_container()
async def _bookmarks_async(container) -> None:
    coordinator = container.cache_coordinator()
    stream = coordinator.observe_bookmarked()
    try:
        movies = await anext(stream)
    finally:
        await stream.aclose()
    if not movies:
        console.print("[yellow]Aucun favori.[/yellow]")
        return
    render_movies(movies, "Favoris")


def network(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Nombre de changements d'etat a afficher"),
    ] = 1,
) -> None:
    """Surveille l'etat de la connectivite reseau."""
    asyncio.run(_network_async(count))


@with_container(requires_db=False)
async def _network_async(container, count: int) -> None:
    observer = container.connectivity_observer()
    seen = 0
    async with observer.is_online() as states:
        async for online in states:
            if online:
                console.print("[green]En ligne[/green]")
            else:
                console.print("[red]Hors ligne[/red]")
            seen += 1
            if seen >= count:
                break
