"""
Utilitaires et constantes pour Popcorn.

Ce module contient les constantes partagees.
"""

from popcorn.utils.constants import CATEGORY_ENDPOINTS, TMDB_GENRE_MAPPING

__all__ = [
    "CATEGORY_ENDPOINTS",
    "TMDB_GENRE_MAPPING",
]
