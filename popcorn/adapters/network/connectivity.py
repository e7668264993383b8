"""
Pont entre les callbacks de connectivite de la plateforme et un flux async.

Un ConnectivitySubscription enregistre un NetworkCallback aupres du service
de connectivite, sonde l'etat courant hors de la boucle d'evenements, puis
expose les changements d'etat comme un iterateur asynchrone de booleens. Les
doublons consecutifs sont supprimes. L'abonnement s'ouvre uniquement via
`async with` ; la sortie du contexte, aclose() ou une annulation
desenregistre toujours le callback.

Les valeurs sont emises dans l'ordre chronologique : un callback recu
pendant l'enregistrement precede la valeur de la sonde, effectuee apres.

Usage:
    observer = ConnectivityObserver(manager)
    async with observer.is_online() as states:
        async for online in states:
            print("en ligne" if online else "hors ligne")
"""

import asyncio
from typing import Optional

from loguru import logger

from popcorn.core.ports.network import IConnectivityManager, NetworkCallback

# Marque la fin du flux dans la file
_END = object()


class _QueueCallback(NetworkCallback):
    """Transfere les evenements de la plateforme dans une file asyncio."""

    def __init__(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
        self._loop = loop
        self._queue = queue

    def _send(self, value: bool) -> None:
        # Les callbacks peuvent arriver depuis un autre thread
        self._loop.call_soon_threadsafe(self._queue.put_nowait, value)

    def on_available(self) -> None:
        self._send(True)

    def on_lost(self) -> None:
        self._send(False)


class ConnectivitySubscription:
    """
    Abonnement a l'etat de connectivite.

    S'ouvre a l'entree du contexte et se ferme a sa sortie ou via aclose().
    Iterer sans `async with` leve RuntimeError. Sans service de connectivite,
    emet False une fois puis se termine.
    """

    def __init__(self, manager: Optional[IConnectivityManager]) -> None:
        self._manager = manager
        self._queue: asyncio.Queue = asyncio.Queue()
        self._callback: Optional[_QueueCallback] = None
        self._last: Optional[bool] = None
        self._opened = False
        self._closed = False

    @property
    def is_registered(self) -> bool:
        """True tant que le callback est enregistre aupres de la plateforme."""
        return self._callback is not None

    async def _open(self) -> None:
        if self._opened:
            return
        self._opened = True

        if self._manager is None:
            logger.warning("Service de connectivite indisponible, etat hors ligne")
            self._queue.put_nowait(False)
            self._queue.put_nowait(_END)
            return

        callback = _QueueCallback(asyncio.get_running_loop(), self._queue)
        self._manager.register_network_callback(callback)
        self._callback = callback

        try:
            # La sonde peut bloquer (socket) : executee dans un thread
            online = await asyncio.to_thread(self._manager.has_internet_capability)
        except OSError as e:
            logger.warning("Sonde de connectivite en echec", error=str(e))
            online = False
        except BaseException:
            await self.aclose()
            raise
        self._queue.put_nowait(online)

    async def aclose(self) -> None:
        """Ferme l'abonnement et desenregistre le callback."""
        self._closed = True
        callback, self._callback = self._callback, None
        if callback is not None and self._manager is not None:
            self._manager.unregister_network_callback(callback)
            logger.debug("Callback de connectivite desenregistre")

    async def __aenter__(self) -> "ConnectivitySubscription":
        await self._open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __aiter__(self) -> "ConnectivitySubscription":
        return self

    async def __anext__(self) -> bool:
        if not self._opened:
            raise RuntimeError("Abonnement de connectivite a ouvrir avec 'async with'")
        while not self._closed:
            try:
                value = await self._queue.get()
            except asyncio.CancelledError:
                # Annulation en cours d'attente : ne jamais laisser fuir le callback
                await self.aclose()
                raise
            if value is _END:
                await self.aclose()
                break
            if value != self._last:
                self._last = value
                return value
        raise StopAsyncIteration


class ConnectivityObserver:
    """
    Expose l'etat de connectivite comme flux de booleens dedoublonnes.

    Chaque appel a is_online() cree un abonnement independant.
    """

    def __init__(self, manager: Optional[IConnectivityManager]) -> None:
        """
        Args:
            manager: Service de connectivite de la plateforme, ou None s'il est
                indisponible
        """
        self._manager = manager

    def is_online(self) -> ConnectivitySubscription:
        """Cree un nouvel abonnement a l'etat de connectivite."""
        return ConnectivitySubscription(self._manager)

    async def current(self) -> bool:
        """Etat de connectivite courant (premiere valeur d'un abonnement)."""
        async with self.is_online() as states:
            async for online in states:
                return online
        return False
