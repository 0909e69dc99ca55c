import threading

from conftest import make_game_payload, make_player_payload
from trivia.db.session import MemoryBackend
from trivia.features.stats.services import StatsService, VisitorCounter


def test_visitor_counter(stores, clock):
    counter = VisitorCounter(stores.stats, clock=clock)
    assert counter.count() == 0
    assert [counter.increment() for _ in range(3)] == [1, 2, 3]
    assert counter.count() == 3


def test_visitor_counter_shared_across_units_of_work(backend, clock):
    for _ in range(4):
        with backend.stores() as stores:
            VisitorCounter(stores.stats, clock=clock).increment()
    with backend.stores() as stores:
        assert VisitorCounter(stores.stats, clock=clock).count() == 4


def test_concurrent_increments_are_not_lost(clock):
    backend = MemoryBackend()

    def visit():
        for _ in range(200):
            with backend.stores() as stores:
                VisitorCounter(stores.stats, clock=clock).increment()

    threads = [threading.Thread(target=visit) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    with backend.stores() as stores:
        assert stores.stats.get_visitor_count() == 1600


def test_today(stores, game_service, player_service, clock):
    game_service.create_game(make_game_payload(1))
    clock.advance(days=-1)
    yesterday = game_service.create_game(make_game_payload(1))
    clock.advance(days=1)
    player_service.create_player(make_player_payload(yesterday.id))

    stats = StatsService(stores.games, stores.players, clock=clock).today()
    assert stats == {"games_played_today": 1, "total_players": 1}


def test_analytics(stores, game_service, player_service, clock):
    quiz = game_service.create_game(make_game_payload(1, name="Quiz"))
    empty = game_service.create_game(make_game_payload(1, name="Vide"))
    clock.advance(days=-2)
    old = game_service.create_game(make_game_payload(1, name="Ancien"))
    clock.advance(days=2)

    alice = player_service.create_player(make_player_payload(quiz.id, name="Alice")).player
    bob = player_service.create_player(make_player_payload(quiz.id, name="Bob", phone="0598765432")).player
    carol = player_service.create_player(make_player_payload(old.id, name="Carol")).player
    player_service.update_player_score(alice.id, 1200, 1, 1, 4)
    player_service.update_player_score(bob.id, 1400, 1, 1, 2)
    player_service.complete_player(alice.id)
    player_service.complete_player(bob.id)
    # Carol n'a pas terminé : pas de gagnant pour "Ancien"
    player_service.update_player_score(carol.id, 3000, 2, 2, 1)

    data = StatsService(stores.games, stores.players, clock=clock).analytics()

    assert data["total_games"] == 3
    assert data["games_played_today"] == 2
    assert data["total_players"] == 3
    assert data["completed_games"] == 1
    assert data["winners_count"] == 1
    assert data["average_players_per_game"] == 1.0
    assert data["winners"] == [
        {
            "name": "Bob",
            "phone": "0598765432",
            "score": 1400,
            "game_name": "Quiz",
            "game_code": quiz.code,
            "completed_at": clock(),
        }
    ]
    assert empty.name not in {w["game_name"] for w in data["winners"]}


def test_analytics_without_games(stores, clock):
    data = StatsService(stores.games, stores.players, clock=clock).analytics()
    assert data["total_games"] == 0
    assert data["average_players_per_game"] == 0.0
    assert data["winners"] == []
