"""
➡️ But : Configurer le logging de l'application une seule fois, au démarrage.

Chaque module récupère ensuite son logger avec logging.getLogger(__name__).
"""

import logging
import sys
from typing import Optional

from trivia.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure le logging standard (stdout, niveau issu des settings).
    Appelée par trivia.main et par les scripts.
    """
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # SQL trop verbeux hors debug
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configuration initialized")
