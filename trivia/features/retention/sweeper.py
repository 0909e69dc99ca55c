"""
➡️ But : Supprimer périodiquement les parties trop anciennes (et tout ce qui en dépend).

RetentionSweeper est une tâche de fond possédée par l'application :
- start() lance un thread qui balaie tout de suite, puis à intervalle fixe
- stop() arrête proprement le thread (arrêt du serveur, fin de test)
- sweep_once() fait un seul passage, appelable directement (tests, scripts)

États : IDLE -> SCANNING -> IDLE.

Un échec sur une partie est loggé et n'empêche pas de traiter les autres ;
une erreur du passage complet est loggée et le passage suivant a lieu normalement.

Une partie peut être supprimée pendant qu'un joueur y joue encore si elle
franchit l'horizon en cours de jeu : l'horizon (72 h par défaut) est choisi
assez large pour que ça n'arrive pas en pratique.
"""

import enum
import logging
import threading
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, List, Optional

from trivia.db.session import Stores
from trivia.domain.errors import NotFoundError
from trivia.features.games.services import GameService
from trivia.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class SweeperState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"


@dataclass
class SweepReport:
    scanned: int = 0
    deleted: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)


class RetentionSweeper:
    def __init__(
        self,
        stores_factory: Callable[[], AbstractContextManager[Stores]],
        *,
        horizon: timedelta,
        interval_seconds: float,
        clock: Clock = utcnow,
    ):
        self.stores_factory = stores_factory
        self.horizon = horizon
        self.interval_seconds = interval_seconds
        self.clock = clock

        self.state = SweeperState.IDLE
        self.last_report: Optional[SweepReport] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ---------- Cycle de vie ----------

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="retention-sweeper", daemon=True)
        self._thread.start()
        logger.info(
            "Retention sweeper started horizon=%s interval=%ss", self.horizon, self.interval_seconds
        )

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Retention sweeper stopped")

    def _run(self) -> None:
        self.sweep_once()
        while not self._stop_event.wait(self.interval_seconds):
            self.sweep_once()

    # ---------- Balayage ----------

    def sweep_once(self) -> SweepReport:
        report = SweepReport()
        self.state = SweeperState.SCANNING
        try:
            cutoff = self.clock() - self.horizon
            with self.stores_factory() as stores:
                expired = GameService(stores.games).get_games_created_before(cutoff)
            report.scanned = len(expired)

            for game in expired:
                try:
                    # une unité de travail par partie : un échec n'entraîne pas les autres
                    with self.stores_factory() as stores:
                        GameService(stores.games).delete_game(game.id)
                    report.deleted.append(game.id)
                except NotFoundError:
                    # déjà supprimée entre le scan et la suppression
                    continue
                except Exception:
                    logger.exception("Retention sweep failed to delete game id=%s", game.id)
                    report.failed.append(game.id)

            if report.deleted or report.failed:
                logger.info(
                    "Retention sweep deleted=%s failed=%s (older than %s)",
                    len(report.deleted),
                    len(report.failed),
                    self.horizon,
                )
        except Exception:
            logger.exception("Retention sweep aborted")
        finally:
            self.state = SweeperState.IDLE
            self.last_report = report
        return report
