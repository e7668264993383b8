"""
Configuration de la base de donnees SQLite pour Popcorn.

Ce module fournit :
- Creation d'engine SQLite configure pour l'acces multi-thread
- Creation des tables
- Ressource d'initialisation pour le container DI

La base de donnees est configuree via POPCORN_DATABASE_URL (defaut: sqlite:///popcorn.db).
"""

from collections.abc import Generator
from pathlib import Path

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLAlchemy pour l'URL donnee.

    Une base SQLite en memoire utilise une StaticPool pour que toutes les
    sessions partagent la meme connexion (et donc les memes tables).

    Args:
        database_url: URL SQLAlchemy (ex: "sqlite:///popcorn.db", "sqlite://")

    Returns:
        Engine pret a l'emploi
    """
    if database_url in MEMORY_URLS:
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # Creer le repertoire parent si l'URL est un fichier SQLite
    if database_url.startswith("sqlite:///"):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def create_tables(engine: Engine) -> None:
    """
    Cree toutes les tables si elles n'existent pas deja.

    Les modeles sont importes ici pour enregistrer leurs metadonnees
    dans SQLModel.metadata sans import circulaire.
    """
    from popcorn.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug("Tables creees", url=str(engine.url))


def init_db(engine: Engine) -> Generator[Engine, None, None]:
    """
    Ressource dependency-injector : cree les tables puis libere l'engine
    a l'arret du container.
    """
    create_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()
