API = "/api/v1"

GAME = {
    "name": "Quiz API",
    "question_duration_seconds": 15,
    "questions": [
        {"text": "1 + 1 ?", "options": ["1", "2", "3"], "correct_answer": 1},
        {"text": "Couleur du ciel ?", "options": ["Bleu", {"text": "Vert"}], "correct_answer": 0},
    ],
}


def _create_game(client):
    r = client.post(f"{API}/games", json=GAME)
    assert r.status_code == 201, r.text
    return r.json()


def _register(client, game_id, name="Alice", phone="0512345678"):
    r = client.post(f"{API}/players", json={"name": name, "phone": phone, "game_id": game_id})
    assert r.status_code == 200, r.text
    return r.json()


def test_create_and_read_game(client):
    game = _create_game(client)
    assert len(game["code"]) == 6
    assert game["question_duration_seconds"] == 15

    assert client.get(f"{API}/games/{game['id']}").json()["code"] == game["code"]
    assert client.get(f"{API}/games/code/{game['code'].lower()}").json()["id"] == game["id"]


def test_create_game_validation_is_422(client):
    r = client.post(f"{API}/games", json={**GAME, "questions": []})
    assert r.status_code == 422


def test_unknown_game_is_404(client):
    assert client.get(f"{API}/games/999").status_code == 404
    assert client.get(f"{API}/games/code/ZZZZZZ").status_code == 404
    r = client.post(f"{API}/players", json={"name": "A", "phone": "0512345678", "game_id": 999})
    assert r.status_code == 404
    assert r.json()["detail"] == "GAME_NOT_FOUND"


def test_questions_are_shuffled_but_consistent(client):
    game = _create_game(client)
    questions = client.get(f"{API}/games/{game['id']}/questions").json()
    assert len(questions) == 2
    by_text = {q["text"]: q for q in questions}
    one_plus_one = by_text["1 + 1 ?"]
    assert one_plus_one["options"][one_plus_one["correct_answer"]]["text"] == "2"
    sky = by_text["Couleur du ciel ?"]
    assert sky["options"][sky["correct_answer"]]["text"] == "Bleu"


def test_full_play_flow(client):
    game = _create_game(client)
    questions = client.get(f"{API}/games/{game['id']}/questions").json()

    reg = _register(client, game["id"])
    assert reg["is_existing"] is False
    player_id = reg["player"]["id"]

    q = questions[0]
    r = client.post(
        f"{API}/players/{player_id}/answers",
        json={"question_id": q["id"], "selected_answer": q["correct_answer"], "is_correct": True, "time_spent": 5},
    )
    assert r.status_code == 200, r.text
    assert r.json()["answer"]["points"] == 1375
    assert r.json()["already_answered"] is False

    again = client.post(
        f"{API}/players/{player_id}/answers",
        json={"question_id": q["id"], "selected_answer": 0, "is_correct": False, "time_spent": 9},
    )
    assert again.json()["already_answered"] is True
    assert again.json()["answer"]["points"] == 1375

    q2 = questions[1]
    client.post(
        f"{API}/players/{player_id}/answers",
        json={"question_id": q2["id"], "selected_answer": -1, "is_correct": False, "time_spent": 20},
    )
    assert len(client.get(f"{API}/players/{player_id}/answers").json()) == 2

    done = client.post(f"{API}/players/{player_id}/complete").json()
    assert done["score"] == 1375
    assert done["correct_answers"] == 1
    assert done["total_answers"] == 2
    assert done["average_time"] == 13
    assert done["completed_at"] is not None

    # réinscription après la fin
    reg = _register(client, game["id"])
    assert reg["is_existing"] is True
    assert reg["has_completed"] is True

    # plus de réponses acceptées
    r = client.post(
        f"{API}/players/{player_id}/answers",
        json={"question_id": q2["id"], "selected_answer": 0, "is_correct": True, "time_spent": 1},
    )
    assert r.status_code == 409


def test_answer_errors(client):
    game = _create_game(client)
    other = _create_game(client)
    foreign_q = client.get(f"{API}/games/{other['id']}/questions").json()[0]
    player_id = _register(client, game["id"])["player"]["id"]

    r = client.post(
        f"{API}/players/{player_id}/answers",
        json={"question_id": foreign_q["id"], "selected_answer": 0, "is_correct": False, "time_spent": 1},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "QUESTION_NOT_IN_GAME"

    r = client.post(
        f"{API}/players/{player_id}/answers",
        json={"question_id": foreign_q["id"], "selected_answer": -1, "is_correct": True, "time_spent": 1},
    )
    assert r.status_code == 422

    r = client.post(
        f"{API}/players/999/answers",
        json={"question_id": foreign_q["id"], "selected_answer": 0, "is_correct": False, "time_spent": 1},
    )
    assert r.status_code == 404


def test_invalid_phone_is_422(client):
    game = _create_game(client)
    r = client.post(f"{API}/players", json={"name": "A", "phone": "12345", "game_id": game["id"]})
    assert r.status_code == 422


def test_leaderboard(client):
    game = _create_game(client)
    q = client.get(f"{API}/games/{game['id']}/questions").json()[0]
    slow = _register(client, game["id"], name="Lent")["player"]["id"]
    fast = _register(client, game["id"], name="Rapide")["player"]["id"]
    for player_id, t in ((slow, 15), (fast, 1)):
        client.post(
            f"{API}/players/{player_id}/answers",
            json={"question_id": q["id"], "selected_answer": q["correct_answer"], "is_correct": True, "time_spent": t},
        )
        client.post(f"{API}/players/{player_id}/complete")

    board = client.get(f"{API}/games/{game['id']}/leaderboard").json()
    assert [p["name"] for p in board] == ["Rapide", "Lent"]
    assert board[0]["score"] > board[1]["score"]


def test_stats_and_visitors(client):
    game = _create_game(client)
    player_id = _register(client, game["id"])["player"]["id"]
    client.post(f"{API}/players/{player_id}/complete")

    assert client.get(f"{API}/stats/today").json() == {"games_played_today": 1, "total_players": 1}

    analytics = client.get(f"{API}/admin/analytics").json()
    assert analytics["total_games"] == 1
    assert analytics["winners_count"] == 1
    assert analytics["winners"][0]["name"] == "Alice"
    assert analytics["winners"][0]["game_code"] == game["code"]

    assert client.get(f"{API}/visitors/count").json() == {"count": 0}
    assert client.post(f"{API}/visitors/track").json() == {"count": 1}
    assert client.post(f"{API}/visitors/track").json() == {"count": 2}
    assert client.get(f"{API}/visitors/count").json() == {"count": 2}
