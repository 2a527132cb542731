"""
Static material evaluation.

The score is always returned from a fixed perspective chosen by the caller,
not from the side to move: the search keeps the same perspective for the
whole tree and alternates maximizing and minimizing nodes instead of negating
scores. A positive score means ``perspective`` is ahead in material.

There are no positional, mobility, or pawn-structure terms. Strength
differences between difficulty tiers come from search depth alone.
"""

from typing import Any, Hashable

from opponent.constants import PIECE_VALUES
from opponent.rules import DEFAULT_RULES, Rules


def evaluate(position: Any, perspective: Hashable, rules: Rules = DEFAULT_RULES) -> int:
    """
    Material balance of ``position`` from ``perspective``'s point of view.

    Args:
        position:    The position to score. Not modified.
        perspective: The side the score is computed for.
        rules:       Rules engine used to read the board.

    Returns:
        Sum of own piece values minus sum of opposing piece values.

    Example:
        >>> import chess
        >>> evaluate(chess.Board(), chess.WHITE)
        0
    """
    total = 0
    for square in rules.squares(position):
        piece = rules.piece_at(position, square)
        if piece is None:
            continue

        kind, side = piece
        value = PIECE_VALUES.get(kind, 0)
        total += value if side == perspective else -value

    return total
