"""
Objets valeur immuables du domaine.

Exports:
- Resource: Union des trois etats d'un resultat (Loading, Success, Error)
- Loading, Success, Error: variantes de Resource
"""

from popcorn.core.value_objects.resource import Error, Loading, Resource, Success

__all__ = [
    "Resource",
    "Loading",
    "Success",
    "Error",
]
