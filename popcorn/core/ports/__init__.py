"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Port source distante :
- IRemoteMovieSource : Recuperation des films depuis l'API
- RawMovie, MoviePage : Donnees brutes de l'API
- RemoteSourceError, ConnectivityError, HttpStatusError : Erreurs de la source

Port stockage : IMovieStore

Port connectivite : IConnectivityManager, NetworkCallback
"""

from popcorn.core.ports.api_clients import (
    ConnectivityError,
    HttpStatusError,
    IRemoteMovieSource,
    MoviePage,
    RawMovie,
    RemoteSourceError,
)
from popcorn.core.ports.network import IConnectivityManager, NetworkCallback
from popcorn.core.ports.repositories import IMovieStore

__all__ = [
    # Source distante
    "IRemoteMovieSource",
    "RawMovie",
    "MoviePage",
    "RemoteSourceError",
    "ConnectivityError",
    "HttpStatusError",
    # Stockage
    "IMovieStore",
    # Connectivite
    "IConnectivityManager",
    "NetworkCallback",
]
