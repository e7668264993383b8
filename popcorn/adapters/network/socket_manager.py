"""
Service de connectivite base sur une sonde TCP.

Implemente IConnectivityManager hors plateforme mobile : la connectivite
internet est consideree disponible si une connexion TCP vers un hote de
reference (par defaut le resolveur DNS 1.1.1.1:53) aboutit.

Une tache de fond, demarree au premier enregistrement et arretee au dernier
desenregistrement, sonde periodiquement l'hote et notifie les callbacks a
chaque transition.
"""

import asyncio
import socket
import threading
from typing import Optional

from loguru import logger

from popcorn.core.ports.network import IConnectivityManager, NetworkCallback


class SocketConnectivityManager(IConnectivityManager):
    """
    Service de connectivite par sonde TCP periodique.

    Attributes:
        DEFAULT_HOST: Hote sonde par defaut
        DEFAULT_PORT: Port sonde par defaut
    """

    DEFAULT_HOST = "1.1.1.1"
    DEFAULT_PORT = 53

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = 3.0,
        interval: float = 5.0,
    ) -> None:
        """
        Args:
            host: Hote de reference
            port: Port TCP de reference
            timeout: Timeout de la sonde en secondes
            interval: Intervalle entre deux sondes de fond en secondes
        """
        self._host = host
        self._port = port
        self._timeout = timeout
        self._interval = interval
        self._callbacks: list[NetworkCallback] = []
        self._lock = threading.Lock()
        self._state: Optional[bool] = None
        self._task: Optional[asyncio.Task] = None

    def _check_reachable(self) -> bool:
        """Sonde bloquante : True si l'hote de reference est joignable."""
        try:
            with socket.create_connection((self._host, self._port), timeout=self._timeout):
                online = True
        except OSError:
            online = False
        self._state = online
        return online

    def has_internet_capability(self) -> bool:
        """Etat connu de la tache de fond, ou sonde immediate a defaut."""
        if self._task is not None and self._state is not None:
            return self._state
        return self._check_reachable()

    def register_network_callback(self, callback: NetworkCallback) -> None:
        with self._lock:
            self._callbacks.append(callback)
        if self._task is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.warning("Aucune boucle asyncio active, sonde periodique desactivee")
                return
            self._task = loop.create_task(self._poll())
            logger.debug("Sonde de connectivite demarree", host=self._host, port=self._port)

    def unregister_network_callback(self, callback: NetworkCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
            remaining = len(self._callbacks)
        if remaining == 0 and self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug("Sonde de connectivite arretee")

    @property
    def callback_count(self) -> int:
        """Nombre de callbacks enregistres."""
        with self._lock:
            return len(self._callbacks)

    async def _poll(self) -> None:
        """Sonde periodiquement l'hote et notifie les transitions."""
        while True:
            await asyncio.sleep(self._interval)
            previous = self._state
            online = await asyncio.to_thread(self._check_reachable)
            if online == previous:
                continue
            logger.info("Changement de connectivite", online=online)
            with self._lock:
                callbacks = list(self._callbacks)
            for callback in callbacks:
                try:
                    if online:
                        callback.on_available()
                    else:
                        callback.on_lost()
                except Exception as e:
                    logger.exception(f"Callback de connectivite en erreur: {e}")
