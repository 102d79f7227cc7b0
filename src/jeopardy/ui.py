"""FastAPI-powered web UI for playing the Jeopardy board in the browser."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .board import RenderInstruction, parse_cell_id
from .controller import BoardBusyError, BoardController, Grid
from .fetcher import DEFAULT_API_URL, CategoryFetcher


@dataclass
class GameSession:
    """Container for one browser's board controller."""

    controller: BoardController


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Jeopardy", description="Random trivia board played in the browser")


API_BASE_URL: str = os.environ.get("JEOPARDY_API_URL", DEFAULT_API_URL)
API_TRANSPORT: Optional[httpx.AsyncBaseTransport] = None
CONCURRENT_FETCH: bool = os.environ.get("JEOPARDY_CONCURRENT_FETCH", "0") == "1"


class ClickRequest(BaseModel):
    """Request payload for clicking a board cell."""

    model_config = ConfigDict(populate_by_name=True)

    cell_id: str = Field(alias="cellId", description="Cell address as \"<category>-<clue>\"")

    @field_validator("cell_id")
    @classmethod
    def ensure_cell_address(cls, value: str) -> str:
        category_index, clue_index = parse_cell_id(value)
        if category_index < 0 or clue_index < 0:
            raise ValueError(f"Cell indices must be non-negative: {value!r}")
        return value


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    fetcher = CategoryFetcher(API_BASE_URL, transport=API_TRANSPORT)
    controller = BoardController(fetcher, concurrent=CONCURRENT_FETCH)
    session = GameSession(controller=controller)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_grid(grid: Grid) -> Dict[str, object]:
    return {
        "categories": [{"title": title} for title in grid.headers],
        "rows": [
            [
                {"cellId": cell.cell_id, "state": cell.css_class, "text": cell.text}
                for cell in row
            ]
            for row in grid.rows
        ],
    }


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    controller = session.controller
    state: Dict[str, object] = {
        "id": game_id,
        "loading": controller.loading,
        "started": controller.started,
        "errors": list(controller.fetch_errors),
    }
    state.update(_serialize_grid(controller.render()))
    return state


def _serialize_instruction(instruction: RenderInstruction) -> Dict[str, object]:
    return {
        "cellId": instruction.cell_id,
        "state": instruction.css_class,
        "text": instruction.text,
        "changed": instruction.changed,
    }


@app.post("/api/game")
async def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    await session.controller.setup_and_start()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
async def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/start")
async def restart_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    await session.controller.setup_and_start()
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/click")
async def click_cell(game_id: str, request: ClickRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    category_index, clue_index = parse_cell_id(request.cell_id)
    try:
        instruction = session.controller.handle_click(category_index, clue_index)
    except BoardBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Cell not found") from exc
    return _serialize_instruction(instruction)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Jeopardy!</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: dark;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
        font-weight: 400;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #1b2a8f, #0b1560 45%, #060b3a 80%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #f4f6ff;
      }
      main {
        width: min(1100px, 100%);
      }
      header {
        display: flex;
        flex-direction: column;
        align-items: center;
        gap: 1rem;
        margin-bottom: 1.5rem;
      }
      h1 {
        margin: 0;
        font-size: clamp(2rem, 3vw + 1.2rem, 3.2rem);
        letter-spacing: 0.06em;
        color: #ffd65a;
        text-shadow: 0 3px 8px rgba(0, 0, 0, 0.45);
      }
      button {
        font-size: 1rem;
        font-weight: 600;
        padding: 0.6rem 1.4rem;
        border-radius: 999px;
        border: 1px solid rgba(255, 214, 90, 0.5);
        background: #ffd65a;
        color: #0b1560;
        cursor: pointer;
        transition: transform 0.1s ease, box-shadow 0.1s ease;
        font-family: inherit;
      }
      button:hover {
        transform: translateY(-1px);
        box-shadow: 0 8px 18px rgba(0, 0, 0, 0.3);
      }
      button.disabled,
      button:disabled {
        cursor: default;
        opacity: 0.6;
        transform: none;
        box-shadow: none;
      }
      #message {
        text-align: center;
        min-height: 1.25rem;
        color: #ff8a8a;
        font-weight: 600;
        margin-bottom: 1rem;
      }
      #spin-container {
        display: flex;
        justify-content: center;
        padding: 3rem 0;
      }
      #spin-container.hidden {
        display: none;
      }
      .spinner {
        width: 3rem;
        height: 3rem;
        border-radius: 999px;
        border: 5px solid rgba(255, 255, 255, 0.2);
        border-top-color: #ffd65a;
        animation: spin 0.8s linear infinite;
      }
      table {
        width: 100%;
        border-collapse: separate;
        border-spacing: 0.4rem;
        table-layout: fixed;
      }
      th {
        background: #0f1f9c;
        padding: 0.9rem 0.5rem;
        border-radius: 10px;
        text-transform: uppercase;
        font-size: clamp(0.7rem, 1vw + 0.3rem, 1rem);
        letter-spacing: 0.04em;
        box-shadow: inset 0 0 0 2px rgba(255, 255, 255, 0.08);
      }
      td {
        height: 6.5rem;
        padding: 0.5rem;
        border-radius: 10px;
        text-align: center;
        vertical-align: middle;
        font-size: clamp(0.7rem, 0.8vw + 0.3rem, 0.95rem);
        background: #1428c4;
        cursor: pointer;
        transition: transform 0.1s ease, box-shadow 0.1s ease, background 0.2s ease;
      }
      td.concealed {
        font-size: 2.4rem;
        font-weight: 700;
        color: #ffd65a;
      }
      td.concealed:hover,
      td.question:hover {
        transform: translateY(-2px) scale(1.02);
        box-shadow: 0 6px 16px rgba(0, 0, 0, 0.35);
      }
      td.question {
        background: #22349c;
      }
      td.answer {
        background: #1f7a4c;
        cursor: default;
      }
      td.empty {
        background: rgba(20, 40, 196, 0.35);
        cursor: default;
      }
      @keyframes spin {
        to {
          transform: rotate(360deg);
        }
      }
    </style>
  </head>
  <body>
    <main>
      <header>
        <h1>Jeopardy!</h1>
        <button id=\"start\" type=\"button\">Start!</button>
      </header>
      <div id=\"message\" role=\"status\"></div>
      <div id=\"spin-container\" class=\"hidden\">
        <div class=\"spinner\" aria-label=\"Loading\"></div>
      </div>
      <table id=\"jeopardy\">
        <thead id=\"header\"></thead>
        <tbody id=\"body\"></tbody>
      </table>
    </main>
    <script>
      const startButton = document.getElementById('start');
      const spinContainer = document.getElementById('spin-container');
      const headerEl = document.getElementById('header');
      const bodyEl = document.getElementById('body');
      const messageEl = document.getElementById('message');

      let gameId = null;
      let isLoading = false;

      function showLoadingView() {
        headerEl.innerHTML = '';
        bodyEl.innerHTML = '';
        messageEl.textContent = '';
        spinContainer.classList.remove('hidden');
        startButton.disabled = true;
        startButton.classList.add('disabled');
        startButton.textContent = 'Loading...';
      }

      function hideLoadingView() {
        startButton.disabled = false;
        startButton.classList.remove('disabled');
        startButton.textContent = 'Restart!';
        spinContainer.classList.add('hidden');
      }

      function applyCell(td, cell) {
        td.className = cell.state;
        td.textContent = cell.text;
      }

      function fillTable(state) {
        hideLoadingView();
        headerEl.innerHTML = '';
        bodyEl.innerHTML = '';
        const headerRow = document.createElement('tr');
        state.categories.forEach((category) => {
          const th = document.createElement('th');
          th.textContent = category.title;
          headerRow.appendChild(th);
        });
        headerEl.appendChild(headerRow);

        state.rows.forEach((row) => {
          const tr = document.createElement('tr');
          row.forEach((cell) => {
            const td = document.createElement('td');
            td.id = cell.cellId;
            applyCell(td, cell);
            tr.appendChild(td);
          });
          bodyEl.appendChild(tr);
        });

        if (state.errors && state.errors.length) {
          messageEl.textContent = `Some categories could not be loaded (${state.errors.length}).`;
        }
      }

      async function setupAndStart() {
        if (isLoading) {
          return;
        }
        isLoading = true;
        showLoadingView();
        try {
          const url = gameId ? `/api/game/${gameId}/start` : '/api/game';
          const response = await fetch(url, { method: 'POST' });
          if (!response.ok) {
            throw new Error('Unable to start game');
          }
          const data = await response.json();
          gameId = data.id;
          fillTable(data);
        } catch (error) {
          hideLoadingView();
          messageEl.textContent = error.message || 'Network error. Please try again.';
        } finally {
          isLoading = false;
        }
      }

      async function handleClick(evt) {
        const td = evt.target.closest('td');
        if (!td || !gameId || td.classList.contains('answer') || td.classList.contains('empty')) {
          return;
        }
        try {
          const response = await fetch(`/api/game/${gameId}/click`, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ cellId: td.id }),
          });
          if (!response.ok) {
            const payload = await response.json().catch(() => ({}));
            messageEl.textContent = payload?.detail || 'Unable to reveal clue';
            return;
          }
          const instruction = await response.json();
          if (instruction.changed) {
            applyCell(td, instruction);
          }
        } catch (error) {
          messageEl.textContent = 'Network error. Please try again.';
        }
      }

      startButton.addEventListener('click', setupAndStart);
      bodyEl.addEventListener('click', handleClick);
    </script>
  </body>
</html>
"""
