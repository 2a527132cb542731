"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

This module defines the public interface the UCI handler and the web API
depend on:

    choose_move(position, difficulty)    -> move or None
    get_best_move(position, difficulty)  -> (move, score, depth, nodes)

Search model:
    Plain minimax rather than negamax. Every score is computed from one fixed
    perspective (the side to move at the root) and nodes alternate between
    maximizing (that side to move) and minimizing (the opponent to move).

    Leaves are scored by the material evaluator. There is no quiescence search
    and no mate score: a checkmated or stalemated position is scored by its
    material like any other leaf. Deep enough search still steers towards
    mates because the opponent's replies in the lines leading there get worse.

Root randomization:
    Legal root moves are shuffled before they are searched and the first move
    with the best score wins. Equal-scoring moves therefore win ties at random
    from call to call, which varies the openings the opponent plays without
    changing the strength of its moves.

Threading model:
    None. The search runs to completion on the caller's thread and mutates the
    position it is given, restoring it before returning. Two concurrent
    searches must be given two independent positions.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Hashable

from opponent.constants import SCORE_INFINITY
from opponent.difficulty import Difficulty, RandomMove, directive_for
from opponent.evaluate import evaluate
from opponent.rules import DEFAULT_RULES, Rules, applied

_log = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """
    Counters for one top-level search call.

    Attributes:
        node_count: Number of positions visited, root children included.
                    Reported by the UCI handler and the benchmark so pruning
                    efficiency can be compared across positions and tiers.
    """

    node_count: int = 0


def minimax(
    position: Any,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    perspective: Hashable,
    rules: Rules = DEFAULT_RULES,
    stats: SearchStats | None = None,
) -> int:
    """
    Minimax search with alpha-beta pruning.

    Args:
        position:    Current position. Modified in place through the rules
                     engine and always restored before returning.
        depth:       Remaining plies. At 0 the position is evaluated.
        alpha:       Best score the maximizing side can already guarantee.
        beta:        Best score the minimizing side can already guarantee.
        maximizing:  True if the side to move here is ``perspective``'s side.
        perspective: Side every score is computed for. Fixed for the whole
                     tree.
        rules:       Rules engine used to enumerate, apply and undo moves.
        stats:       Optional per-call counters.

    Returns:
        The minimax value of the position from ``perspective``, over the moves
        explored before a cutoff. Pruning never changes this value at the
        root of the call; it only skips branches that cannot affect it.

    Pruning:
        Once ``beta <= alpha`` the remaining sibling moves are never applied.
        A maximizing node stops when it has found a line at least as good as
        what the minimizer is already guaranteed elsewhere, and vice versa.
    """
    if stats is not None:
        stats.node_count += 1

    if depth == 0 or rules.is_game_over(position):
        return evaluate(position, perspective, rules)

    moves = rules.legal_moves(position)
    if not moves:
        return evaluate(position, perspective, rules)

    if maximizing:
        best = -SCORE_INFINITY
        for move in moves:
            with applied(rules, position, move):
                score = minimax(position, depth - 1, alpha, beta, False, perspective, rules, stats)
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = SCORE_INFINITY
    for move in moves:
        with applied(rules, position, move):
            score = minimax(position, depth - 1, alpha, beta, True, perspective, rules, stats)
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def get_best_move(
    position: Any,
    difficulty: Difficulty,
    rules: Rules = DEFAULT_RULES,
    rng: random.Random | None = None,
) -> tuple[Any | None, int, int, int]:
    """
    Pick a move for the side to move at the given difficulty.

    The return type is always (move, score, depth, nodes):
        - move:  The chosen move, or None if the side to move has no legal
                 moves. Callers are expected to have detected the end of the
                 game already; None is not a game-over signal of its own.
        - score: Material score of the chosen move from the mover's
                 perspective after the searched line. 0 for random moves.
        - depth: Plies searched, root move included. 0 for random moves.
        - nodes: Positions visited below the root.

    Args:
        position:   The current position. Restored before returning.
        difficulty: Strength tier. Must be a ``Difficulty`` member.
        rules:      Rules engine driving the search.
        rng:        Source of randomness for shuffling. Defaults to the
                    ``random`` module's shared generator.

    Returns:
        Tuple of (move, score, depth, nodes).
    """
    directive = directive_for(difficulty)
    shuffle = (rng or random).shuffle

    moves = list(rules.legal_moves(position))
    if not moves:
        return (None, 0, 0, 0)

    shuffle(moves)

    if isinstance(directive, RandomMove):
        _log.debug("difficulty=%s random move from %d", difficulty.value, len(moves))
        return (moves[0], 0, 0, 0)

    perspective = rules.side_to_move(position)
    stats = SearchStats()
    best_move = None
    best_score = -SCORE_INFINITY

    for move in moves:
        with applied(rules, position, move):
            score = minimax(
                position,
                directive.depth - 1,
                -SCORE_INFINITY,
                SCORE_INFINITY,
                False,
                perspective,
                rules,
                stats,
            )
        if score > best_score:
            best_score = score
            best_move = move

    if best_move is None:
        best_move = moves[0]

    _log.debug(
        "difficulty=%s depth=%d score=%d nodes=%d",
        difficulty.value,
        directive.depth,
        best_score,
        stats.node_count,
    )
    return (best_move, best_score, directive.depth, stats.node_count)


def choose_move(
    position: Any,
    difficulty: Difficulty,
    rules: Rules = DEFAULT_RULES,
    rng: random.Random | None = None,
) -> Any | None:
    """
    Return the opponent's move for ``position``, or None if there is none.

    Example:
        >>> import chess
        >>> move = choose_move(chess.Board(), Difficulty.EASY)
        >>> move in chess.Board().legal_moves
        True
    """
    move, _, _, _ = get_best_move(position, difficulty, rules, rng)
    return move
