"""Tests for the FastAPI tic-tac-toe interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from tictactoe.ui import app


client = TestClient(app)


def _new_game(**names):
    response = client.post("/api/game", json=names)
    assert response.status_code == 200
    return response.json()


def _move(game_id, index):
    response = client.post(f"/api/game/{game_id}/move", json={"cellIndex": index})
    assert response.status_code == 200
    return response.json()


def test_index_serves_board_page():
    response = client.get("/")
    assert response.status_code == 200
    assert 'id="gameboard"' in response.text
    assert 'id="restart-btn"' in response.text


def test_create_game_applies_default_names():
    payload = _new_game(player1="  ", player2=None)
    assert payload["phase"] == "in_progress"
    assert payload["cells"] == [""] * 9
    assert payload["players"] == [
        {"name": "Player 1", "marker": "X"},
        {"name": "Player 2", "marker": "O"},
    ]
    assert payload["message"] == "Player 1's turn"


def test_moves_until_win():
    game_id = _new_game(player1="Ann", player2="Bo")["id"]
    for index in (0, 3, 1, 4):
        state = _move(game_id, index)
        assert state["accepted"] is True
    state = _move(game_id, 2)
    assert state["phase"] == "won"
    assert state["message"] == "Ann wins!"
    assert state["winner"] == {"name": "Ann", "marker": "X"}

    late = _move(game_id, 8)
    assert late["accepted"] is False
    assert late["cells"][8] == ""


def test_rejected_move_leaves_state_unchanged():
    game_id = _new_game(player1="Ann", player2="Bo")["id"]
    before = _move(game_id, 4)

    for index in (4, 9, -1):
        after = _move(game_id, index)
        assert after["accepted"] is False
        assert after["cells"] == before["cells"]
        assert after["message"] == before["message"] == "Bo's turn"
        assert after["revision"] == before["revision"]


def test_restart_resets_same_session():
    game_id = _new_game(player1="Ann", player2="Bo")["id"]
    _move(game_id, 0)

    response = client.post(
        f"/api/game/{game_id}/restart", json={"player1": "Cy", "player2": ""}
    )
    assert response.status_code == 200
    state = response.json()
    assert state["id"] == game_id
    assert state["cells"] == [""] * 9
    assert state["message"] == "Cy's turn"
    assert state["players"][1]["name"] == "Player 2"

    fetched = client.get(f"/api/game/{game_id}").json()
    assert fetched["cells"] == state["cells"]


def test_sessions_are_independent():
    first = _new_game(player1="Ann", player2="Bo")["id"]
    second = _new_game(player1="Cy", player2="Di")["id"]
    _move(first, 4)
    assert client.get(f"/api/game/{second}").json()["cells"] == [""] * 9


def test_non_integer_cell_index_is_unprocessable():
    game_id = _new_game()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"cellIndex": "middle"})
    assert response.status_code == 422


def test_missing_game_returns_404():
    assert client.get("/api/game/does-not-exist").status_code == 404
    response = client.post("/api/game/does-not-exist/move", json={"cellIndex": 0})
    assert response.status_code == 404
    assert response.json()["detail"] == "Game not found"
