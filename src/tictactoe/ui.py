"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .game import GameEngine
from .players import read_player_names

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for one browser game; also acts as the engine's renderer."""

    engine: GameEngine = field(default_factory=GameEngine)
    revision: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        self.engine.renderer = self

    def on_state_change(self, cells: Sequence[str], message: str) -> None:
        # The page redraws from the serialized state; only count the pushes.
        self.revision += 1


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Tic-Tac-Toe", description="Two-player tic-tac-toe in the browser")

MAX_NAME_LENGTH = 40


class NewGameRequest(BaseModel):
    """Request payload for starting or restarting a game."""

    player1: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    player2: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)

    @model_validator(mode="after")
    def apply_default_names(self) -> "NewGameRequest":
        self.player1, self.player2 = read_player_names(self.player1, self.player2)
        return self


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    # Range is not validated here: off-board moves are no-ops in the engine.
    cell_index: int = Field(alias="cellIndex")


def _create_session(player1: str, player2: str) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession()
    with session.lock:
        session.engine.start(player1, player2)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        logger.warning("Unknown game id %s", game_id)
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        state: Dict[str, object] = {"id": game_id, "revision": session.revision}
        state.update(session.engine.snapshot())
        return state


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.player1, request.player2)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        accepted = session.engine.submit_move(request.cell_index)
    state = _serialize_session(game_id, session)
    state["accepted"] = accepted
    return state


@app.post("/api/game/{game_id}/restart")
def restart_game(
    game_id: str, request: Optional[NewGameRequest] = None
) -> Dict[str, object]:
    session = _get_session(game_id)
    names = request or NewGameRequest()
    with session.lock:
        session.engine.start(names.player1, names.player2)
    logger.info("Restarted game %s", game_id)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(480px, 100%);
      }
      h1 {
        margin: 0 0 1.25rem;
        text-align: center;
        letter-spacing: 0.06em;
      }
      .controls {
        display: flex;
        flex-wrap: wrap;
        gap: 0.75rem;
        justify-content: center;
        margin-bottom: 1.5rem;
      }
      button,
      input[type='text'] {
        font-size: 1rem;
        padding: 0.55rem 0.95rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        font-family: inherit;
      }
      button {
        cursor: pointer;
        background: rgba(226, 232, 255, 0.9);
        font-weight: 600;
      }
      #gameboard {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        margin: 0 auto 1.25rem;
        width: min(320px, 100%);
        aspect-ratio: 1;
      }
      .cell {
        display: flex;
        align-items: center;
        justify-content: center;
        font-size: 2.5rem;
        font-weight: 700;
        border-radius: 12px;
        background: rgba(236, 243, 255, 0.9);
        border: 1px solid rgba(58, 102, 255, 0.25);
        cursor: pointer;
        user-select: none;
      }
      .cell.x {
        color: #3a66ff;
      }
      .cell.o {
        color: #ff5a7a;
      }
      #message-display {
        text-align: center;
        font-weight: 600;
        min-height: 1.5rem;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-Tac-Toe</h1>
      <div class=\"controls\">
        <input type=\"text\" id=\"player1-name\" placeholder=\"Player 1 (X)\" maxlength=\"40\" />
        <input type=\"text\" id=\"player2-name\" placeholder=\"Player 2 (O)\" maxlength=\"40\" />
        <button id=\"restart-btn\">Start / Restart</button>
      </div>
      <div id=\"gameboard\"></div>
      <div id=\"message-display\">Enter names and press start.</div>
    </main>
    <script>
      const boardDiv = document.querySelector('#gameboard');
      const messageDiv = document.querySelector('#message-display');
      let gameId = null;
      let state = null;

      function render(next) {
        state = next;
        boardDiv.innerHTML = '';
        next.cells.forEach((cell, index) => {
          const cellDiv = document.createElement('div');
          cellDiv.classList.add('cell');
          cellDiv.dataset.index = index;
          cellDiv.textContent = cell;
          if (cell === 'X') {
            cellDiv.classList.add('x');
          } else if (cell === 'O') {
            cellDiv.classList.add('o');
          }
          boardDiv.appendChild(cellDiv);
        });
        messageDiv.textContent = next.message;
      }

      async function post(url, body) {
        const response = await fetch(url, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body),
        });
        if (!response.ok) {
          throw new Error(`Request failed: ${response.status}`);
        }
        return response.json();
      }

      function readPlayerNames() {
        return {
          player1: document.querySelector('#player1-name').value,
          player2: document.querySelector('#player2-name').value,
        };
      }

      async function start() {
        const names = readPlayerNames();
        const next = gameId
          ? await post(`/api/game/${gameId}/restart`, names)
          : await post('/api/game', names);
        gameId = next.id;
        render(next);
      }

      boardDiv.addEventListener('click', async (event) => {
        const target = event.target.closest('.cell');
        if (!target || !state || state.phase !== 'in_progress') {
          return;
        }
        if (target.textContent !== '') {
          return;
        }
        const next = await post(`/api/game/${gameId}/move`, {
          cellIndex: Number(target.dataset.index),
        });
        render(next);
      });

      document.querySelector('#restart-btn').addEventListener('click', () => {
        start().catch((error) => {
          messageDiv.textContent = error.message;
        });
      });
    </script>
  </body>
</html>
"""
