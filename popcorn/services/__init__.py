"""
Services applicatifs de Popcorn.

- CacheCoordinator : orchestration offline-first source distante / cache local
"""

from popcorn.services.cache_coordinator import CacheCoordinator

__all__ = ["CacheCoordinator"]
