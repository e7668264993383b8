"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : un seul stockage
local est partage par toutes les operations du CacheCoordinator, passe
explicitement plutot qu'accede comme singleton global.
"""

from dependency_injector import containers, providers

from .adapters.api.tmdb_client import TMDBClient
from .adapters.network.connectivity import ConnectivityObserver
from .adapters.network.socket_manager import SocketConnectivityManager
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.movie_store import SQLModelMovieStore
from .services.cache_coordinator import CacheCoordinator


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        coordinator = container.cache_coordinator()
        observer = container.connectivity_observer()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine unique, Resource pour la creation des tables
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Stockage local - Singleton : le signal de modification des favoris
    # doit etre partage par tous les observateurs
    movie_store = providers.Singleton(SQLModelMovieStore, engine=engine)

    # Source distante
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        base_url=config.provided.tmdb_base_url,
        language=config.provided.tmdb_language,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.max_retries,
    )

    # Coeur offline-first
    cache_coordinator = providers.Factory(
        CacheCoordinator,
        remote=tmdb_client,
        store=movie_store,
    )

    # Connectivite
    connectivity_manager = providers.Singleton(
        SocketConnectivityManager,
        host=config.provided.connectivity_host,
        port=config.provided.connectivity_port,
        timeout=config.provided.connectivity_timeout,
        interval=config.provided.connectivity_interval,
    )
    connectivity_observer = providers.Singleton(
        ConnectivityObserver,
        manager=connectivity_manager,
    )
