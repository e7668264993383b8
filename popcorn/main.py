"""
Point d'entree CLI de Popcorn.

Configure le logging et monte les commandes CLI.
"""

import typer
from loguru import logger

from .adapters.cli.commands import (
    bookmark,
    bookmarks,
    details,
    network,
    now_playing,
    search,
    trending,
)
from .config import Settings
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="popcorn",
    help="Consultation offline-first des films TMDB",
)

app.command()(trending)
app.command(name="now-playing")(now_playing)
app.command()(details)
app.command()(search)
app.command()(bookmark)
app.command()(bookmarks)
app.command()(network)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'}")
    typer.echo(f"Langue : {config.tmdb_language}")
    typer.echo(f"Sonde reseau : {config.connectivity_host}:{config.connectivity_port}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Popcorn v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    settings = Settings()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    if not settings.tmdb_enabled:
        logger.warning("POPCORN_TMDB_API_KEY absente, seul le cache local sera disponible")

    logger.debug("Demarrage de Popcorn", version=__version__)
    app()


if __name__ == "__main__":
    main()
