"""
Interfaces ports pour le service de connectivite de la plateforme.

Le service notifie les changements de disponibilite du reseau via des
callbacks et permet d'interroger de maniere synchrone l'etat courant.
Les callbacks peuvent etre invoques depuis n'importe quel thread.
"""

from abc import ABC, abstractmethod


class NetworkCallback(ABC):
    """Callback notifie des changements de disponibilite du reseau."""

    @abstractmethod
    def on_available(self) -> None:
        """Un reseau avec acces internet est disponible."""
        ...

    @abstractmethod
    def on_lost(self) -> None:
        """Le reseau a ete perdu."""
        ...


class IConnectivityManager(ABC):
    """Service de connectivite de la plateforme."""

    @abstractmethod
    def register_network_callback(self, callback: NetworkCallback) -> None:
        """Enregistre un callback de changement de reseau."""
        ...

    @abstractmethod
    def unregister_network_callback(self, callback: NetworkCallback) -> None:
        """Desenregistre un callback precedemment enregistre."""
        ...

    @abstractmethod
    def has_internet_capability(self) -> bool:
        """Interroge de maniere synchrone la connectivite internet courante."""
        ...
