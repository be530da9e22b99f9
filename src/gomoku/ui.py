"""FastAPI-powered web UI for playing Gomoku in the browser."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .game import (
    BLACK,
    BOARD_SIZE,
    CELL_OCCUPIED,
    GAME_OVER,
    OUT_OF_BOUNDS,
    WHITE,
    WIN_LENGTH,
    GomokuGame,
    MoveResult,
    Player,
)

logger = logging.getLogger(__name__)

PLAYER_NAMES: Dict[Player, str] = {BLACK: "Black", WHITE: "White"}

REJECTION_MESSAGES: Dict[str, str] = {
    OUT_OF_BOUNDS: "Move is outside the board",
    CELL_OCCUPIED: "Cell already occupied",
    GAME_OVER: "Game already finished",
}


@dataclass
class GameSession:
    """Container for an active Gomoku game shared by two players at one screen."""

    game: GomokuGame
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    last_active: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
SESSIONS_LOCK = threading.Lock()
SESSION_TTL_SECONDS = 60 * 60  # 1 hour
app = FastAPI(title="Gomoku", description="Five in a row played in the browser")


class MoveRequest(BaseModel):
    """Request payload for placing a stone on an existing game."""

    row: int = Field(ge=0, le=BOARD_SIZE - 1)
    col: int = Field(ge=0, le=BOARD_SIZE - 1)


def _cleanup_sessions() -> None:
    """Remove sessions nobody has touched for SESSION_TTL_SECONDS."""

    now = time.time()
    expired = [
        session_id
        for session_id, session in list(SESSIONS.items())
        if now - session.last_active >= SESSION_TTL_SECONDS
    ]
    for session_id in expired:
        SESSIONS.pop(session_id, None)
    if expired:
        logger.info("Evicted %d idle games", len(expired))


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession(game=GomokuGame())
    session_id = uuid.uuid4().hex
    with SESSIONS_LOCK:
        _cleanup_sessions()
        SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        session = SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc
    session.last_active = time.time()
    return session


def _status_message(game: GomokuGame) -> str:
    if game.winner is not None:
        return f"{PLAYER_NAMES[game.winner]} wins!"
    return f"{PLAYER_NAMES[game.current_player]} to move"


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        state: Dict[str, object] = {
            "id": game_id,
            "boardSize": BOARD_SIZE,
            "winLength": WIN_LENGTH,
            "board": game.rows(),
            "currentPlayer": game.current_player,
            "status": game.status,
            "winner": game.winner,
            "moveCount": game.move_count,
            "moveLog": list(session.move_log),
            "message": _status_message(game),
        }
        if session.move_log:
            state["lastMove"] = session.move_log[-1]
        return state


def _apply_player_move(session: GameSession, row: int, col: int) -> MoveResult:
    with session.lock:
        result = session.game.apply_move(row, col)
        if not result.accepted:
            logger.info(
                "Rejected move by %s at (%d, %d): %s",
                result.player,
                row,
                col,
                result.reason,
            )
            raise HTTPException(
                status_code=400,
                detail={
                    "reason": result.reason,
                    "message": REJECTION_MESSAGES[result.reason],
                },
            )
        session.move_log.append({"player": result.player, "row": row, "col": col})
        return result


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(session, request.row, request.col)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/restart")
def restart_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.game.restart()
        session.move_log.clear()
    logger.info("Restarted game %s", game_id)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}/cell")
def get_cell(
    game_id: str,
    row: int = Query(ge=0, le=BOARD_SIZE - 1),
    col: int = Query(ge=0, le=BOARD_SIZE - 1),
) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        cell = session.game.get_cell(row, col)
    return {"row": row, "col": col, "cell": cell}


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Gomoku</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        background: #f3ead7;
        color: #2b1d0e;
      }
      main {
        display: flex;
        flex-direction: column;
        align-items: center;
        gap: 1rem;
      }
      h1 {
        margin: 0;
        letter-spacing: 0.06em;
      }
      #gameBoard {
        box-shadow: 0 12px 28px rgba(60, 40, 10, 0.25);
        cursor: pointer;
      }
      #status {
        font-size: 1.2rem;
        font-weight: 600;
        min-height: 1.5em;
      }
      #error {
        color: #a12a1a;
        min-height: 1.2em;
      }
      button {
        font-size: 1rem;
        padding: 0.55rem 1.2rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 40, 10, 0.3);
        background: white;
        cursor: pointer;
        font-family: inherit;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Gomoku</h1>
      <div id=\"status\">Loading&hellip;</div>
      <canvas id=\"gameBoard\" width=\"600\" height=\"600\"></canvas>
      <div id=\"error\"></div>
      <button id=\"restart\" type=\"button\">Restart</button>
    </main>
    <script>
      const canvas = document.getElementById('gameBoard');
      const ctx = canvas.getContext('2d');
      const statusEl = document.getElementById('status');
      const errorEl = document.getElementById('error');

      const CELL_SIZE = 40;
      const PIECE_RADIUS = 18;
      const BOARD_PADDING = 20;
      const STAR_POINTS = [3, 7, 11];

      let gameId = null;
      let state = null;

      function drawBoard(size) {
        ctx.clearRect(0, 0, canvas.width, canvas.height);
        ctx.fillStyle = '#DEB887';
        ctx.fillRect(0, 0, canvas.width, canvas.height);

        ctx.beginPath();
        ctx.strokeStyle = '#000000';
        ctx.lineWidth = 1;
        for (let i = 0; i < size; i++) {
          const position = BOARD_PADDING + i * CELL_SIZE;
          ctx.moveTo(BOARD_PADDING, position);
          ctx.lineTo(canvas.width - BOARD_PADDING, position);
          ctx.moveTo(position, BOARD_PADDING);
          ctx.lineTo(position, canvas.height - BOARD_PADDING);
        }
        ctx.stroke();

        STAR_POINTS.forEach((x) => {
          STAR_POINTS.forEach((y) => {
            ctx.beginPath();
            ctx.arc(BOARD_PADDING + x * CELL_SIZE, BOARD_PADDING + y * CELL_SIZE, 4, 0, Math.PI * 2);
            ctx.fillStyle = '#000000';
            ctx.fill();
          });
        });
      }

      function drawPiece(row, col, player) {
        const x = BOARD_PADDING + col * CELL_SIZE;
        const y = BOARD_PADDING + row * CELL_SIZE;

        ctx.beginPath();
        ctx.arc(x, y, PIECE_RADIUS, 0, Math.PI * 2);
        const gradient = ctx.createRadialGradient(x - 5, y - 5, 1, x, y, PIECE_RADIUS);
        if (player === 'B') {
          gradient.addColorStop(0, '#666');
          gradient.addColorStop(1, '#000');
        } else {
          gradient.addColorStop(0, '#fff');
          gradient.addColorStop(1, '#ccc');
        }
        ctx.fillStyle = gradient;
        ctx.fill();
        ctx.strokeStyle = player === 'B' ? '#000' : '#888';
        ctx.stroke();
      }

      function markLastMove(move) {
        const x = BOARD_PADDING + move.col * CELL_SIZE;
        const y = BOARD_PADDING + move.row * CELL_SIZE;
        ctx.beginPath();
        ctx.arc(x, y, 4, 0, Math.PI * 2);
        ctx.fillStyle = '#d33';
        ctx.fill();
      }

      function render(next) {
        state = next;
        drawBoard(state.boardSize);
        state.board.forEach((cells, row) => {
          cells.forEach((cell, col) => {
            if (cell !== '.') {
              drawPiece(row, col, cell);
            }
          });
        });
        if (state.lastMove) {
          markLastMove(state.lastMove);
        }
        statusEl.textContent = state.message;
      }

      async function request(path, options) {
        const response = await fetch(path, options);
        const payload = await response.json();
        if (!response.ok) {
          const detail = payload.detail;
          throw new Error(detail && detail.message ? detail.message : 'Request failed');
        }
        return payload;
      }

      async function newGame() {
        const payload = await request('/api/game', { method: 'POST' });
        gameId = payload.id;
        render(payload);
      }

      async function makeMove(row, col) {
        errorEl.textContent = '';
        try {
          const payload = await request(`/api/game/${gameId}/move`, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ row, col }),
          });
          render(payload);
        } catch (err) {
          errorEl.textContent = err.message;
        }
      }

      canvas.addEventListener('click', (event) => {
        if (!state || state.status !== 'in_progress') {
          return;
        }
        const rect = canvas.getBoundingClientRect();
        const x = event.clientX - rect.left;
        const y = event.clientY - rect.top;
        const col = Math.round((x - BOARD_PADDING) / CELL_SIZE);
        const row = Math.round((y - BOARD_PADDING) / CELL_SIZE);
        if (row >= 0 && row < state.boardSize && col >= 0 && col < state.boardSize) {
          makeMove(row, col);
        }
      });

      document.getElementById('restart').addEventListener('click', async () => {
        errorEl.textContent = '';
        try {
          if (!gameId) {
            await newGame();
            return;
          }
          render(await request(`/api/game/${gameId}/restart`, { method: 'POST' }));
        } catch (err) {
          errorEl.textContent = err.message;
        }
      });

      newGame().catch((err) => {
        statusEl.textContent = err.message;
      });
    </script>
  </body>
</html>
"""
