"""
Utilitaires partages pour les commandes CLI de Popcorn.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
- render_resource : affichage d'un evenement Resource
- render_movies / render_movie : affichage des films
"""

from functools import wraps

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from popcorn.container import Container
from popcorn.core.entities.movie import MovieRecord
from popcorn.core.value_objects import Error, Loading, Resource, Success

console = Console()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Les ressources du container (base de donnees) sont liberees a la fin
    de la commande.

    Args:
        requires_db: Si True (defaut), cree les tables de la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            coordinator = container.cache_coordinator()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                container.shutdown_resources()
        return wrapper
    return decorator


def _bookmark_mark(movie: MovieRecord) -> str:
    return "[yellow]★[/yellow]" if movie.is_bookmarked else ""


def render_movies(movies: list[MovieRecord], title: str) -> None:
    """Affiche une liste de films sous forme de tableau."""
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Titre", style="bold")
    table.add_column("Annee", justify="center")
    table.add_column("Note", justify="right")
    table.add_column("", justify="center")
    for movie in movies:
        rating = f"{movie.vote_average:.1f}" if movie.vote_average is not None else "-"
        table.add_row(
            str(movie.id),
            movie.title,
            str(movie.year) if movie.year else "-",
            rating,
            _bookmark_mark(movie),
        )
    console.print(table)


def render_movie(movie: MovieRecord, title: str) -> None:
    """Affiche les details d'un film dans un panneau."""
    lines = [f"[bold]{movie.title}[/bold] {_bookmark_mark(movie)}"]
    if movie.tagline:
        lines.append(f"[italic]{movie.tagline}[/italic]")
    if movie.release_date:
        lines.append(f"Sortie : {movie.release_date}")
    if movie.runtime:
        lines.append(f"Duree : {movie.runtime} min")
    if movie.genres:
        lines.append(f"Genres : {', '.join(movie.genres)}")
    if movie.vote_average is not None:
        lines.append(f"Note : {movie.vote_average:.1f} ({movie.vote_count or 0} votes)")
    if movie.overview:
        lines.append("")
        lines.append(movie.overview)
    console.print(Panel("\n".join(lines), title=title))


def _render_payload(data, title: str) -> None:
    if isinstance(data, MovieRecord):
        render_movie(data, title)
    elif data:
        render_movies(data, title)


def render_resource(resource: Resource, label: str) -> None:
    """
    Affiche un evenement Resource.

    Loading sans donnees affiche un indicateur, Loading avec donnees affiche
    le cache, Success les donnees fraiches, Error le message et le cache.
    """
    if isinstance(resource, Loading):
        if resource.data is None:
            console.print(f"[dim]Chargement {label}...[/dim]")
        else:
            _render_payload(resource.data, f"{label} (cache)")
    elif isinstance(resource, Success):
        if resource.data:
            _render_payload(resource.data, label)
        else:
            console.print("[yellow]Aucun resultat.[/yellow]")
    elif isinstance(resource, Error):
        console.print(f"[red]Erreur :[/red] {resource.message}")
        if resource.data:
            _render_payload(resource.data, f"{label} (hors ligne)")
