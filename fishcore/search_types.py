"""Per-ply search stack entries, root moves and search limits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .types import BLACK, MOVE_NONE, VALUE_INFINITE, VALUE_ZERO, WHITE


@dataclass
class Stack:
    """What the search remembers about one ply of the current line."""

    pv: Optional[list] = None
    continuation_history: Any = None
    ply: int = 0
    current_move: int = MOVE_NONE
    excluded_move: int = MOVE_NONE
    killers: list = field(default_factory=lambda: [MOVE_NONE, MOVE_NONE])
    static_eval: int = VALUE_ZERO
    stat_score: int = 0
    move_count: int = 0
    in_check: bool = False
    tt_pv: bool = False
    tt_hit: bool = False
    double_extensions: int = 0
    cutoff_cnt: int = 0


@dataclass(eq=False)
class RootMove:
    """A move at the root with its score and principal variation.

    A root move equals the plain move that starts its variation, and
    orders before another root move when its score is higher.
    """

    move: int
    score: int = -VALUE_INFINITE
    previous_score: int = -VALUE_INFINITE
    average_score: int = -VALUE_INFINITE
    score_lowerbound: bool = False
    score_upperbound: bool = False
    sel_depth: int = 0
    tb_rank: int = 0
    tb_score: int = VALUE_ZERO
    pv: list = field(init=False)

    def __post_init__(self) -> None:
        self.pv = [self.move]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RootMove):
            return self.pv[0] == other.pv[0]
        if isinstance(other, int):
            return self.pv[0] == other
        return NotImplemented

    __hash__ = None

    def __lt__(self, other: "RootMove") -> bool:
        if other.score != self.score:
            return other.score < self.score
        return other.previous_score < self.previous_score

    def sort_key(self) -> tuple[int, int]:
        """Key that sorts root moves best first."""
        return (-self.score, -self.previous_score)


@dataclass
class LimitsType:
    """Time, depth and node limits for a search."""

    searchmoves: list = field(default_factory=list)
    time: list = field(default_factory=lambda: [0, 0])
    inc: list = field(default_factory=lambda: [0, 0])
    npmsec: int = 0
    movetime: int = 0
    start_time: int = 0
    movestogo: int = 0
    depth: int = 0
    mate: int = 0
    perft: int = 0
    infinite: int = 0
    nodes: int = 0

    def use_time_management(self) -> bool:
        """True when a clock is running for either side."""
        return bool(self.time[WHITE] or self.time[BLACK])