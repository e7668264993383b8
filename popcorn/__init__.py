"""
Popcorn - Couche d'acces aux donnees offline-first pour une application de films.

Ce package recupere les listes et details de films depuis TMDB, les met en cache
localement, reconcilie l'etat des favoris et se replie sur le cache en cas
d'echec reseau.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (CacheCoordinator)
- adapters/ : Couche infrastructure (CLI, clients API, connectivite)
- infrastructure/ : Persistance SQLite via SQLModel
"""
