"""
Journalisation loguru de Popcorn.

Deux sorties : stderr pour suivre les commandes en direct, et un fichier JSON
tournant qui garde la trace des replis hors ligne.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <8}</level> "
    "<cyan>{name}</cyan> | <level>{message}</level> {extra}"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les handlers loguru par ceux de Popcorn.

    Sans log_file, seule la sortie console est active.
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT)

    if log_file is None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    # DEBUG : TMDBClient journalise les erreurs de transport a ce niveau
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        enqueue=True,
    )
