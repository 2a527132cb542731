"""
Chess opponent package.

Picks moves for a computer-controlled chess opponent at one of four strength
tiers using fixed-depth minimax with alpha-beta pruning over a material-only
evaluation. The rules of chess come from python-chess through a small adapter;
this package only searches.

Modules:
    constants  — Piece values, score bounds, and per-tier depths
    rules      — Rules-engine contract and the python-chess adapter
    evaluate   — Static material evaluation from a fixed perspective
    difficulty — Difficulty tiers and the tier -> search directive policy
    search     — Minimax with alpha-beta pruning and root move selection
"""

from opponent.difficulty import Difficulty, FixedDepth, RandomMove, directive_for
from opponent.search import choose_move, get_best_move

__all__ = [
    "Difficulty",
    "FixedDepth",
    "RandomMove",
    "choose_move",
    "directive_for",
    "get_best_move",
]
