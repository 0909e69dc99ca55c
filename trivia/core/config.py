"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, backend de stockage, rétention, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from trivia.core.config import settings
print(settings.RETENTION_HOURS)
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Trivia-Live"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # Stockage
    # -----------------------------
    STORAGE_BACKEND: str = "sql"  # sql | memory
    SQLITE_PATH: str = "trivia.db"
    # Pour forcer une URL différente (ex: Postgres), définir DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Parties
    # -----------------------------
    GAME_CODE_MAX_ATTEMPTS: int = 10

    # -----------------------------
    # Rétention
    # -----------------------------
    RETENTION_ENABLED: bool = True
    RETENTION_HOURS: int = 72
    RETENTION_SWEEP_INTERVAL_SECONDS: int = 60 * 60

    # -----------------------------
    # Seed
    # -----------------------------
    SEED_PATH: str = "trivia/db/seed_data.yaml"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context):  # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

    @property
    def retention_horizon(self) -> timedelta:
        return timedelta(hours=self.RETENTION_HOURS)


# Instance globale importable partout
settings = Settings()
