"""
Opponent constants: piece values, score bounds, and per-tier search depths.

All numeric constants used by the evaluator, the search, and the difficulty
policy are defined here so the rest of the package never introduces magic
numbers. Tuning a tier or a piece value is a one-line change in this file.

Piece values use a coarse "tens" scale (1 pawn = 10) rather than centipawns.
The evaluation is material-only, so only the ratios between values matter.
"""

# ---------------------------------------------------------------------------
# Piece values
# ---------------------------------------------------------------------------
# Keyed by the lowercase piece symbol so the table is independent of any one
# rules-engine representation. The king's large value means a position where
# a king has gone missing is never mistaken for an ordinary material swing.

PAWN_VALUE: int = 10
KNIGHT_VALUE: int = 30
BISHOP_VALUE: int = 30
ROOK_VALUE: int = 50
QUEEN_VALUE: int = 90
KING_VALUE: int = 900

PIECE_VALUES: dict[str, int] = {
    "p": PAWN_VALUE,
    "n": KNIGHT_VALUE,
    "b": BISHOP_VALUE,
    "r": ROOK_VALUE,
    "q": QUEEN_VALUE,
    "k": KING_VALUE,
}

# ---------------------------------------------------------------------------
# Score bounds
# ---------------------------------------------------------------------------
# Scores are integers. SCORE_INFINITY is the "no bound" sentinel for the
# alpha-beta window. The largest reachable material swing is a few thousand
# (every piece on one side plus promoted queens), so no evaluation can ever
# reach the sentinel.

SCORE_INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Difficulty tiers
# ---------------------------------------------------------------------------
# Plies searched per tier. Beginner does not search at all (random move).
# Master is capped at Hard's depth: the search is synchronous and runs on the
# caller's thread, so depth 4 makes an interactive opponent feel stuck.

EASY_DEPTH: int = 2
HARD_DEPTH: int = 3
MASTER_DEPTH: int = 3

# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

DEFAULT_DIFFICULTY_NAME: str = "Easy"
ENGINE_NAME: str = "ChessOpponent"
ENGINE_AUTHOR: str = "Chess Opponent Project"
