"""
Rules-engine contract and the python-chess implementation of it.

The search never inspects positions or moves directly. Everything it needs
(move generation, apply/undo, game-over detection, and piece lookup for the
evaluator) goes through a small capability interface, ``Rules``. Any object
with these methods can drive the search: the production adapter wraps a
``chess.Board``, and the tests drive the search over a hand-built game tree.

Positions are mutated in place. ``apply`` and ``undo`` must be strictly
paired in LIFO order; ``applied()`` is the scope guard that guarantees the
pairing on every exit path, including pruning breaks and exceptions.
"""

from contextlib import contextmanager
from typing import Any, Hashable, Iterable, Iterator, Protocol, Sequence

import chess


class Rules(Protocol):
    """Operations the search needs from a rules engine."""

    def legal_moves(self, position: Any) -> Sequence[Any]:
        """Legal moves for the side to move (empty when there are none)."""

    def apply(self, position: Any, move: Any) -> None:
        """Play ``move`` on ``position`` in place and switch the side to move."""

    def undo(self, position: Any) -> None:
        """Reverse the most recent ``apply`` exactly."""

    def is_game_over(self, position: Any) -> bool:
        """True when the game has ended by the rules engine's own rules."""

    def side_to_move(self, position: Any) -> Hashable:
        """The side whose turn it is."""

    def squares(self, position: Any) -> Iterable[Any]:
        """Every square coordinate of the board."""

    def piece_at(self, position: Any, square: Any) -> tuple[str, Hashable] | None:
        """``(kind, side)`` of the piece on ``square``, or None if empty.

        ``kind`` is a lowercase piece symbol ("p", "n", "b", "r", "q", "k").
        """


class PythonChessRules:
    """
    ``Rules`` over a ``chess.Board``.

    Moves are ``chess.Move`` objects and sides are python-chess colours
    (``chess.WHITE`` / ``chess.BLACK``).

    Game over covers checkmate, stalemate, insufficient material, the
    fifty-move rule, and a threefold repetition of the current position.
    python-chess only ends the game automatically at 75 moves or fivefold
    repetition; the claimable draws are counted here as well so the opponent
    sees a draw at the same point the players do.
    """

    def legal_moves(self, board: chess.Board) -> list[chess.Move]:
        return list(board.legal_moves)

    def apply(self, board: chess.Board, move: chess.Move) -> None:
        # Legality is the caller's contract; this only fires in development.
        assert board.is_legal(move), f"illegal move {move.uci()} in {board.fen()}"
        board.push(move)

    def undo(self, board: chess.Board) -> None:
        assert board.move_stack, "undo() without a matching apply()"
        board.pop()

    def is_game_over(self, board: chess.Board) -> bool:
        return (
            board.is_game_over()
            or board.is_fifty_moves()
            or board.is_repetition(3)
        )

    def side_to_move(self, board: chess.Board) -> chess.Color:
        return board.turn

    def squares(self, board: chess.Board) -> Iterable[chess.Square]:
        return chess.SQUARES

    def piece_at(
        self, board: chess.Board, square: chess.Square
    ) -> tuple[str, chess.Color] | None:
        piece = board.piece_at(square)
        if piece is None:
            return None
        return chess.piece_symbol(piece.piece_type), piece.color


DEFAULT_RULES = PythonChessRules()


@contextmanager
def applied(rules: Rules, position: Any, move: Any) -> Iterator[None]:
    """
    Apply ``move`` for the duration of a ``with`` block.

    The move is undone when the block exits, whether it returns normally,
    breaks out of the enclosing loop, or raises.

    Example:
        >>> board = chess.Board()
        >>> with applied(DEFAULT_RULES, board, chess.Move.from_uci("e2e4")):
        ...     board.turn == chess.BLACK
        True
        >>> board.fen() == chess.STARTING_FEN
        True
    """
    rules.apply(position, move)
    try:
        yield
    finally:
        rules.undo(position)
