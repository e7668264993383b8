"""
Couche domaine de Popcorn.

Contient les entites (MovieRecord), les objets valeur (Resource) et les ports
(interfaces abstraites) que les adaptateurs implementent.
"""
