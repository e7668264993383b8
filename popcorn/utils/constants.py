"""
Constantes globales pour Popcorn.

Ce module contient:
- Les endpoints TMDB par categorie de liste
- Le mapping des IDs de genre TMDB vers leurs noms (langue en-US)
"""

from popcorn.core.entities.movie import MovieCategory

# Endpoints TMDB v3 des categories de liste
CATEGORY_ENDPOINTS = {
    MovieCategory.TRENDING: "/trending/movie/week",
    MovieCategory.NOW_PLAYING: "/movie/now_playing",
}

# Les endpoints de liste ne renvoient que genre_ids ; les details renvoient les noms
TMDB_GENRE_MAPPING = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}
