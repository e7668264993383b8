"""
Business entities representing core domain concepts.

Exports:
- MovieCategory: Named bucket a movie record was fetched into
- MovieRecord: Cached movie metadata with its bookmark flag
"""

from popcorn.core.entities.movie import MovieCategory, MovieRecord

__all__ = [
    "MovieCategory",
    "MovieRecord",
]
