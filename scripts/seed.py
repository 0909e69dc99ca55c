from trivia.core.config import settings
from trivia.core.logging_config import setup_logging
from trivia.db.seed import load_seed_yaml, seed_games
from trivia.db.session import get_backend, init_db
from trivia.features.games.services import GameService


def run_seed():
    setup_logging()
    init_db()
    data = load_seed_yaml(settings.SEED_PATH)
    with get_backend().stores() as stores:
        games = seed_games(data, GameService(stores.games))
    for game in games:
        print(f"{game.code}  {game.name}")


if __name__ == "__main__":
    run_seed()
