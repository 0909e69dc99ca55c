"""
➡️ But : Configurer le stockage et fournir des "stores" par unité de travail.

engine : connexion à la base (SQLite par défaut, toute URL SQLAlchemy acceptée).

init_db() : crée les tables à partir des modèles SQLModel.

SqlBackend / MemoryBackend : exposent stores(), un context manager qui fournit
les trois stores (parties, joueurs, stats) pour une requête ou un passage du
balayeur de rétention.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Union

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

# Import all models for creating all tables
from trivia.db.models.games import GameRow  # noqa: F401
from trivia.db.models.questions import QuestionRow  # noqa: F401
from trivia.db.models.players import PlayerRow  # noqa: F401
from trivia.db.models.player_answers import PlayerAnswerRow  # noqa: F401
from trivia.db.models.site_stats import SiteStatsRow  # noqa: F401

from trivia.db.memory import (
    InMemoryGameStore,
    InMemoryPlayerStore,
    InMemoryStatsStore,
    MemoryDatabase,
)
from trivia.db.repositories.games import GameRepository
from trivia.db.repositories.players import PlayerRepository
from trivia.db.repositories.site_stats import StatsRepository
from trivia.domain.repositories import GameStore, PlayerStore, StatsStore

from trivia.core.config import Settings, settings


@dataclass
class Stores:
    games: GameStore
    players: PlayerStore
    stats: StatsStore


def build_engine(url: str, *, echo: bool = False) -> Engine:
    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False
        if url in ("sqlite://", "sqlite:///:memory:"):
            # base en mémoire : une seule connexion partagée, sinon chaque connexion a sa base vide
            kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **kwargs,
    )


class SqlBackend:
    name = "sql"

    def __init__(self, engine: Engine):
        self.engine = engine

    def init(self) -> None:
        """
        Crée les tables si elles n'existent pas (usage dev/demo).
        En prod, préférer des migrations.
        """
        SQLModel.metadata.create_all(self.engine)

    @contextmanager
    def stores(self) -> Iterator[Stores]:
        with Session(self.engine) as session:
            yield Stores(
                games=GameRepository(session),
                players=PlayerRepository(session),
                stats=StatsRepository(session),
            )


class MemoryBackend:
    name = "memory"

    def __init__(self, db: Optional[MemoryDatabase] = None):
        self.db = db or MemoryDatabase()

    def init(self) -> None:
        pass

    @contextmanager
    def stores(self) -> Iterator[Stores]:
        yield Stores(
            games=InMemoryGameStore(self.db),
            players=InMemoryPlayerStore(self.db),
            stats=InMemoryStatsStore(self.db),
        )


Backend = Union[SqlBackend, MemoryBackend]


def build_backend(cfg: Settings = settings) -> Backend:
    if cfg.STORAGE_BACKEND == "memory":
        return MemoryBackend()
    if cfg.STORAGE_BACKEND == "sql":
        assert cfg.DATABASE_URL, "DATABASE_URL must be set"
        return SqlBackend(build_engine(cfg.DATABASE_URL, echo=False))
    raise ValueError(f"Unknown STORAGE_BACKEND: {cfg.STORAGE_BACKEND!r}")


backend: Backend = build_backend()


def init_db() -> None:
    backend.init()


def get_backend() -> Backend:
    return backend

