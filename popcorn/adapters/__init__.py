"""
Adaptateurs de Popcorn (couche infrastructure).

- api/ : client TMDB (source distante)
- network/ : observation de la connectivite
- cli/ : commandes Typer
"""
