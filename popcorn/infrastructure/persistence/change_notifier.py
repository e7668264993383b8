"""
Signal de modification du stockage pour les flux push.

Chaque observateur detient un asyncio.Event leve a chaque ecriture dans le
stockage. notify() doit etre appele depuis la boucle d'evenements.
"""

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager


class ChangeNotifier:
    """Diffuse un signal de modification a tous les observateurs actifs."""

    def __init__(self) -> None:
        self._listeners: set[asyncio.Event] = set()

    @property
    def listener_count(self) -> int:
        """Nombre d'observateurs actuellement abonnes."""
        return len(self._listeners)

    def notify(self) -> None:
        """Signale une modification a tous les observateurs."""
        for event in list(self._listeners):
            event.set()

    @contextmanager
    def listen(self) -> Iterator[asyncio.Event]:
        """
        Abonne un observateur pour la duree du bloc.

        Usage:
            with notifier.listen() as changed:
                while True:
                    changed.clear()
                    yield await read_snapshot()
                    await changed.wait()
        """
        event = asyncio.Event()
        self._listeners.add(event)
        try:
            yield event
        finally:
            self._listeners.discard(event)
