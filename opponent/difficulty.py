"""
Difficulty tiers and the policy that maps each tier to a search directive.

The policy is a single table decided once per call. The search itself never
looks at the difficulty; it only sees the depth the directive hands it.
"""

import enum
from dataclasses import dataclass

from opponent.constants import EASY_DEPTH, HARD_DEPTH, MASTER_DEPTH


class Difficulty(str, enum.Enum):
    """Strength tiers, weakest first. Members compare by strength."""

    BEGINNER = "Beginner"
    EASY = "Easy"
    HARD = "Hard"
    MASTER = "Master"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank >= other.rank


_ORDER = list(Difficulty)


@dataclass(frozen=True)
class RandomMove:
    """Skip the search and play a uniformly random legal move."""


@dataclass(frozen=True)
class FixedDepth:
    """Search the full tree to ``depth`` plies (root move included)."""

    depth: int

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"search depth must be at least 1, got {self.depth}")


SearchDirective = RandomMove | FixedDepth

DIRECTIVES: dict[Difficulty, SearchDirective] = {
    Difficulty.BEGINNER: RandomMove(),
    Difficulty.EASY: FixedDepth(EASY_DEPTH),
    Difficulty.HARD: FixedDepth(HARD_DEPTH),
    Difficulty.MASTER: FixedDepth(MASTER_DEPTH),
}


def directive_for(difficulty: Difficulty) -> SearchDirective:
    """
    Return the search directive for ``difficulty``.

    Raises:
        KeyError: ``difficulty`` is not a ``Difficulty`` member. Tiers are a
                  closed set; anything else is a bug in the caller.
    """
    return DIRECTIVES[difficulty]
