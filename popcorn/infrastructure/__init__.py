"""Couche infrastructure de Popcorn (persistance SQLite)."""
