"""
➡️ But : Centraliser les dépendances réutilisables des routes.

get_stores() : ouvre une unité de travail (session SQL ou stores mémoire) par requête.

get_game_service() / get_player_service() / ... : construisent les services à partir des stores.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Les tests remplacent le backend via app.dependency_overrides[get_backend].
"""

from typing import Iterator

from fastapi import Depends

from trivia.core.config import settings
from trivia.db.session import Backend, Stores, get_backend
from trivia.features.games.codes import CodeGenerator
from trivia.features.games.services import GameService
from trivia.features.players.services import PlayerService
from trivia.features.stats.services import StatsService, VisitorCounter


def get_stores(backend: Backend = Depends(get_backend)) -> Iterator[Stores]:
    with backend.stores() as stores:
        yield stores


# -----------------------------
# Services
# -----------------------------
def get_game_service(stores: Stores = Depends(get_stores)) -> GameService:
    return GameService(
        stores.games,
        code_generator=CodeGenerator(max_attempts=settings.GAME_CODE_MAX_ATTEMPTS),
    )


def get_player_service(stores: Stores = Depends(get_stores)) -> PlayerService:
    return PlayerService(stores.players, stores.games)


def get_stats_service(stores: Stores = Depends(get_stores)) -> StatsService:
    return StatsService(stores.games, stores.players)


def get_visitor_counter(stores: Stores = Depends(get_stores)) -> VisitorCounter:
    return VisitorCounter(stores.stats)
