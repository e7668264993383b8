"""
Enveloppe de resultat a trois etats pour les flux du CacheCoordinator.

Chaque operation produit une sequence d'evenements Resource :
- Loading : chargement en cours, avec eventuellement des donnees en cache
- Success : donnees fraiches (terminal)
- Error : echec avec message utilisateur et donnees perimees eventuelles (terminal)
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Loading(Generic[T]):
    """Chargement en cours. `data` porte un instantane du cache s'il existe."""

    data: Optional[T] = None

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Success(Generic[T]):
    """Donnees fraiches provenant de la source distante."""

    data: T

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Error(Generic[T]):
    """
    Echec de l'operation.

    Attributes:
        message: Message destine a l'utilisateur (voir core.errors)
        data: Meilleures donnees perimees capturees avant l'echec, ou None
    """

    message: str
    data: Optional[T] = None

    @property
    def is_terminal(self) -> bool:
        return True


Resource = Union[Loading[T], Success[T], Error[T]]
