"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe POPCORN_,
et peut optionnellement etre fournie via un fichier .env.

La cle API TMDB est optionnelle : sans elle, toutes les recuperations distantes
echouent et le CacheCoordinator se replie sur le cache local.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env a la racine du projet (parent de popcorn/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe POPCORN_.
    Exemple : POPCORN_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="POPCORN_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API TMDB
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_language: str = Field(default="en-US")
    http_timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=5, ge=1)

    # Base de donnees
    database_url: str = Field(default="sqlite:///popcorn.db")

    # Sonde de connectivite
    connectivity_host: str = Field(default="1.1.1.1")
    connectivity_port: int = Field(default=53, ge=1, le=65535)
    connectivity_timeout: float = Field(default=3.0, gt=0)
    connectivity_interval: float = Field(default=5.0, gt=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/popcorn.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Niveau de log en majuscules (debug -> DEBUG)."""
        return v.upper()

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return bool(self.tmdb_api_key)
