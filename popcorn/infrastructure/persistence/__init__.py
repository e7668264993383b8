"""
Module de persistance SQLite pour Popcorn.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine SQLite, creation des tables
- models.py : Modeles SQLModel representant les tables de la base de donnees
- movie_store.py : Implementation SQLModel de IMovieStore
- change_notifier.py : Signal de modification pour les flux push

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans le store.

Usage:
    from popcorn.infrastructure.persistence import create_db_engine, create_tables
    from popcorn.infrastructure.persistence import SQLModelMovieStore

    engine = create_db_engine("sqlite:///popcorn.db")
    create_tables(engine)
    store = SQLModelMovieStore(engine)
"""

from popcorn.infrastructure.persistence.change_notifier import ChangeNotifier
from popcorn.infrastructure.persistence.database import (
    create_db_engine,
    create_tables,
    init_db,
)
from popcorn.infrastructure.persistence.models import BookmarkModel, MovieModel
from popcorn.infrastructure.persistence.movie_store import SQLModelMovieStore

__all__ = [
    "create_db_engine",
    "create_tables",
    "init_db",
    "MovieModel",
    "BookmarkModel",
    "SQLModelMovieStore",
    "ChangeNotifier",
]
