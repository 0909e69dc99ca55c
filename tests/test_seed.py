from pathlib import Path

import pytest

from trivia.db.seed import load_seed_yaml, seed_games

SEED_FILE = Path(__file__).resolve().parents[1] / "trivia" / "db" / "seed_data.yaml"


def test_seed_file_creates_games(game_service):
    games = seed_games(load_seed_yaml(SEED_FILE), game_service)
    assert [g.name for g in games] == ["Culture générale", "Sprint"]
    assert games[1].question_duration_seconds == 10
    questions = game_service.games.list_questions(games[0].id)
    assert len(questions) == 3
    assert questions[2].options[2].text == "Dioxyde de carbone"


def test_missing_seed_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_yaml(tmp_path / "absent.yaml")


def test_seed_root_must_be_mapping(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed_yaml(path)


def test_invalid_seed_entry_is_rejected(tmp_path, game_service):
    path = tmp_path / "seed.yaml"
    path.write_text("games:\n  - name: x\n    questions: []\n", encoding="utf-8")
    with pytest.raises(ValueError):
        seed_games(load_seed_yaml(path), game_service)
