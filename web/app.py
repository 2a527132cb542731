"""
FastAPI web application for the chess opponent.

Exposes a small JSON API:
    POST /api/move          — the opponent's move for a FEN at a difficulty
    GET  /api/difficulties  — the available tiers and how each one plays
    GET  /api/status        — human-readable status line for a FEN

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like the search.
- Stateless per request: the client sends the full FEN each time and every
  request parses its own board, so concurrent searches never share a
  position.

Run with: uvicorn web.app:app
"""

import logging

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from opponent.constants import DEFAULT_DIFFICULTY_NAME
from opponent.difficulty import DIRECTIVES, Difficulty, FixedDepth
from opponent.rules import DEFAULT_RULES
from opponent.search import get_best_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Chess Opponent", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the opponent.

    Fields:
        fen:        Full FEN string of the current position.
        difficulty: Strength tier. Unknown names are rejected with 422.
    """

    fen: str
    difficulty: Difficulty = Difficulty(DEFAULT_DIFFICULTY_NAME)


class MoveResponse(BaseModel):
    """
    The opponent's reply.

    Fields:
        move:   Chosen move in UCI notation (e.g. "e2e4", "e7e8q").
        fen:    Board FEN after the move is applied.
        score:  Material score from the opponent's perspective after the
                searched line. Always 0 for Beginner (random) moves.
        depth:  Plies searched; 0 for Beginner.
        nodes:  Positions visited by the search.
        status: Game status after the move, e.g. "Check!".
    """

    move: str
    fen: str
    score: int
    depth: int
    nodes: int
    status: str


class DifficultyInfo(BaseModel):
    name: str
    mode: str
    depth: int | None = None


class StatusResponse(BaseModel):
    fen: str
    turn: str
    status: str
    is_game_over: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_fen(fen: str) -> chess.Board:
    try:
        return chess.Board(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc


def _side_name(color: chess.Color) -> str:
    return "White" if color == chess.WHITE else "Black"


def describe_status(board: chess.Board) -> str:
    """
    One-line game status for display.

    Checkmate names the winner (the side that is not to move). Every other
    ending the opponent treats as terminal reads "Draw!".

    Example:
        >>> describe_status(chess.Board())
        "White's turn"
    """
    if board.is_checkmate():
        return f"Checkmate! {_side_name(not board.turn)} wins."
    if DEFAULT_RULES.is_game_over(board):
        return "Draw!"
    if board.is_check():
        return "Check!"
    return f"{_side_name(board.turn)}'s turn"


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the opponent's move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: The search failed or returned no move (should
                           not happen in non-terminal positions).
    """
    board = _parse_fen(request.fen)

    if DEFAULT_RULES.is_game_over(board):
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {describe_status(board)}",
        )

    try:
        move, score, depth, nodes = get_best_move(board, request.difficulty)
    except Exception as exc:
        _log.exception("Search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s difficulty=%s score=%d depth=%d nodes=%d fen=%s",
        move.uci(),
        request.difficulty.value,
        score,
        depth,
        nodes,
        request.fen[:40],
    )

    board.push(move)
    return MoveResponse(
        move=move.uci(),
        fen=board.fen(),
        score=score,
        depth=depth,
        nodes=nodes,
        status=describe_status(board),
    )


@app.get("/api/difficulties", response_model=list[DifficultyInfo])
def api_difficulties() -> list[DifficultyInfo]:
    """List the difficulty tiers, weakest first."""
    tiers = []
    for difficulty, directive in DIRECTIVES.items():
        if isinstance(directive, FixedDepth):
            tiers.append(DifficultyInfo(name=difficulty.value, mode="depth", depth=directive.depth))
        else:
            tiers.append(DifficultyInfo(name=difficulty.value, mode="random"))
    return tiers


@app.get("/api/status", response_model=StatusResponse)
def api_status(fen: str = chess.STARTING_FEN) -> StatusResponse:
    """Status line, side to move and game-over flag for a position."""
    board = _parse_fen(fen)
    return StatusResponse(
        fen=board.fen(),
        turn=_side_name(board.turn).lower(),
        status=describe_status(board),
        is_game_over=DEFAULT_RULES.is_game_over(board),
    )
