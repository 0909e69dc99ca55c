from typing import Any, Dict, List

from trivia.domain.repositories import GameStore, PlayerStore, StatsStore
from trivia.features.players.services import PlayerService
from trivia.utils.clock import Clock, utcnow


class VisitorCounter:
    """Compteur de visites du site, incrément atomique délégué au store."""

    def __init__(self, stats_store: StatsStore, *, clock: Clock = utcnow):
        self.stats = stats_store
        self.clock = clock

    def increment(self) -> int:
        return self.stats.increment_visitors(self.clock())

    def count(self) -> int:
        return self.stats.get_visitor_count()


class StatsService:
    """
    Statistiques globales : parties du jour, joueurs, gagnants.

    Le vainqueur d'une partie est le premier joueur terminé du classement.
    """

    def __init__(self, game_store: GameStore, player_store: PlayerStore, *, clock: Clock = utcnow):
        self.games = game_store
        self.players = PlayerService(player_store, game_store, clock=clock)
        self.clock = clock

    def today(self) -> Dict[str, int]:
        today = self.clock().date()
        games = self.games.list_games()
        return {
            "games_played_today": sum(1 for g in games if g.created_at.date() == today),
            "total_players": len(self.players.get_all_players()),
        }

    def analytics(self) -> Dict[str, Any]:
        today = self.clock().date()
        games = self.games.list_games()
        total_players = len(self.players.get_all_players())

        winners: List[Dict[str, Any]] = []
        for game in games:
            completed = [p for p in self.players.get_players_by_game(game.id) if p.has_completed]
            if not completed:
                continue
            winner = completed[0]
            winners.append(
                {
                    "name": winner.name,
                    "phone": winner.phone,
                    "score": winner.score,
                    "game_name": game.name,
                    "game_code": game.code,
                    "completed_at": winner.completed_at,
                }
            )

        return {
            "total_games": len(games),
            "games_played_today": sum(1 for g in games if g.created_at.date() == today),
            "total_players": total_players,
            "completed_games": len(winners),
            "winners_count": self.players.get_winners_count(),
            "winners": winners,
            "average_players_per_game": round(total_players / len(games), 1) if games else 0.0,
        }
