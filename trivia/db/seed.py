import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from trivia.domain.models import Game
from trivia.features.games.schemas import GameCreateIn
from trivia.features.games.services import GameService

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seed
# -----------------------------
def seed_games(data: Dict[str, Any], game_svc: GameService) -> List[Game]:
    """
    Crée une partie par entrée de `games:`. Chaque entrée est validée comme
    une création normale (GameCreateIn) : un YAML invalide lève une erreur.
    """
    created: List[Game] = []
    for raw in data.get("games", []):
        game = game_svc.create_game(GameCreateIn.model_validate(raw))
        created.append(game)
        logger.info("Seeded game %r with code %s", game.name, game.code)
    return created
