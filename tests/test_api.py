"""Tests for the FastAPI Gomoku interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from gomoku import ui
from gomoku.ui import app


client = TestClient(app)


def _new_game() -> str:
    response = client.post("/api/game")
    assert response.status_code == 200
    return response.json()["id"]


def _move(game_id: str, row: int, col: int):
    return client.post(f"/api/game/{game_id}/move", json={"row": row, "col": col})


def test_create_game_and_first_move():
    response = client.post("/api/game")
    assert response.status_code == 200
    payload = response.json()
    assert payload["currentPlayer"] == "B"
    assert payload["status"] == "in_progress"
    assert payload["boardSize"] == 15
    assert payload["moveLog"] == []
    assert payload["message"] == "Black to move"

    game_id = payload["id"]
    move_response = _move(game_id, 7, 7)
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["board"][7][7] == "B"
    assert state["currentPlayer"] == "W"
    assert state["lastMove"] == {"player": "B", "row": 7, "col": 7}
    assert state["message"] == "White to move"

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    assert follow_up.json()["moveCount"] == 1


def test_occupied_cell_rejected():
    game_id = _new_game()
    assert _move(game_id, 0, 0).status_code == 200

    duplicate = _move(game_id, 0, 0)
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"]["reason"] == "cell_occupied"

    state = client.get(f"/api/game/{game_id}").json()
    assert state["currentPlayer"] == "W"
    assert len(state["moveLog"]) == 1


def test_out_of_range_move_fails_validation():
    game_id = _new_game()
    response = _move(game_id, 15, 0)
    assert response.status_code == 422


def test_win_then_game_over_then_restart():
    game_id = _new_game()
    black = [(7, 3), (7, 4), (7, 5), (7, 6)]
    white = [(0, 0), (0, 1), (0, 2), (0, 3)]
    for b, w in zip(black, white):
        assert _move(game_id, *b).status_code == 200
        assert _move(game_id, *w).status_code == 200

    winning = _move(game_id, 7, 7)
    assert winning.status_code == 200
    state = winning.json()
    assert state["status"] == "won"
    assert state["winner"] == "B"
    assert state["message"] == "Black wins!"

    late = _move(game_id, 0, 4)
    assert late.status_code == 400
    assert late.json()["detail"]["reason"] == "game_over"

    restarted = client.post(f"/api/game/{game_id}/restart")
    assert restarted.status_code == 200
    fresh = restarted.json()
    assert fresh["status"] == "in_progress"
    assert fresh["winner"] is None
    assert fresh["currentPlayer"] == "B"
    assert fresh["moveLog"] == []
    assert all(cell == "." for row in fresh["board"] for cell in row)


def test_cell_query():
    game_id = _new_game()
    _move(game_id, 2, 3)

    response = client.get(f"/api/game/{game_id}/cell", params={"row": 2, "col": 3})
    assert response.status_code == 200
    assert response.json() == {"row": 2, "col": 3, "cell": "B"}

    empty = client.get(f"/api/game/{game_id}/cell", params={"row": 0, "col": 0})
    assert empty.json()["cell"] == "."

    outside = client.get(f"/api/game/{game_id}/cell", params={"row": -1, "col": 0})
    assert outside.status_code == 422


def test_missing_game_returns_404():
    missing = client.get("/api/game/INVALID")
    assert missing.status_code == 404
    assert _move("INVALID", 0, 0).status_code == 404


def test_index_serves_board_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "gameBoard" in response.text


def test_idle_games_are_evicted():
    stale_id = _new_game()
    fresh_id = _new_game()
    ui.SESSIONS[stale_id].last_active -= ui.SESSION_TTL_SECONDS + 1

    _new_game()

    assert stale_id not in ui.SESSIONS
    assert fresh_id in ui.SESSIONS
    assert client.get(f"/api/game/{stale_id}").status_code == 404


def test_index_restart_reports_errors():
    page = client.get("/").text
    restart_handler = page.split("getElementById('restart')", 1)[1]
    assert "catch (err)" in restart_handler.split("newGame().catch", 1)[0]
