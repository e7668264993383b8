"""
Observation de la connectivite reseau.

- ConnectivityObserver : flux dedoublonne d'etats "en ligne"
- ConnectivitySubscription : abonnement possedant l'enregistrement du callback
- SocketConnectivityManager : service de connectivite par sonde TCP
"""

from popcorn.adapters.network.connectivity import (
    ConnectivityObserver,
    ConnectivitySubscription,
)
from popcorn.adapters.network.socket_manager import SocketConnectivityManager

__all__ = [
    "ConnectivityObserver",
    "ConnectivitySubscription",
    "SocketConnectivityManager",
]
