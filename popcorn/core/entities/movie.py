"""
Movie record entities.

A MovieRecord is the cached form of a TMDB movie, tagged with the category
fetch that created it and carrying the user's bookmark flag.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"


class MovieCategory(str, Enum):
    """
    Category a movie record belongs to.

    SEARCH is transient: search results are displayed but never persisted.
    """

    TRENDING = "trending"
    NOW_PLAYING = "now_playing"
    DETAIL = "detail"
    SEARCH = "search"

    @property
    def is_listing(self) -> bool:
        """True for categories fetched as a list from a fixed endpoint."""
        return self in (MovieCategory.TRENDING, MovieCategory.NOW_PLAYING)


@dataclass
class MovieRecord:
    """
    Cached movie metadata.

    At most one record exists per (id, category). The bookmark flag is shared
    by every record with the same id, whatever category created it.

    Attributes:
        id: TMDB movie ID
        category: Category fetch that created or last refreshed the record
        title: Localized title
        original_title: Original language title
        overview: Plot summary
        poster_path: Path to poster image on TMDB CDN
        backdrop_path: Path to backdrop image on TMDB CDN
        release_date: Release date as returned by TMDB (YYYY-MM-DD)
        vote_average: Average TMDB rating (0-10)
        vote_count: Number of TMDB votes
        popularity: TMDB popularity score
        original_language: ISO 639-1 code of the original language
        genres: Tuple of genre names (details only)
        runtime: Runtime in minutes (details only)
        tagline: Tagline (details only)
        is_bookmarked: User bookmark flag
    """

    id: int
    category: MovieCategory
    title: str = ""
    original_title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    popularity: Optional[float] = None
    original_language: Optional[str] = None
    genres: tuple[str, ...] = ()
    runtime: Optional[int] = None
    tagline: Optional[str] = None
    is_bookmarked: bool = False

    @property
    def year(self) -> Optional[int]:
        """Release year extracted from release_date, if any."""
        if self.release_date and len(self.release_date) >= 4 and self.release_date[:4].isdigit():
            return int(self.release_date[:4])
        return None

    @property
    def poster_url(self) -> Optional[str]:
        """Full URL to the poster image."""
        return f"{TMDB_IMAGE_BASE_URL}{self.poster_path}" if self.poster_path else None

    @property
    def backdrop_url(self) -> Optional[str]:
        """Full URL to the backdrop image."""
        return f"{TMDB_IMAGE_BASE_URL}{self.backdrop_path}" if self.backdrop_path else None

    def with_bookmark(self, is_bookmarked: bool) -> "MovieRecord":
        """Return a copy carrying the given bookmark flag."""
        return replace(self, is_bookmarked=is_bookmarked)
