"""64-bit bitboards and attack tables."""

from __future__ import annotations

from collections.abc import Iterator

from .types import (
    BISHOP,
    KING,
    KNIGHT,
    MASK64,
    PAWN,
    QUEEN,
    ROOK,
    SQUARE_NB,
    WHITE,
    file_of,
    make_square,
    rank_of,
)

FILE_A_BB = 0x0101010101010101
FILE_H_BB = FILE_A_BB << 7
RANK_1_BB = 0xFF
RANK_8_BB = RANK_1_BB << 56
DARK_SQUARES = 0xAA55AA55AA55AA55

_KNIGHT_STEPS = ((1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2))
_KING_STEPS = ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1))
_ROOK_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def square_bb(s: int) -> int:
    return 1 << s


def file_bb(s: int) -> int:
    """All squares on the file of square ``s``."""
    return FILE_A_BB << file_of(s)


def rank_bb(r: int) -> int:
    """All squares on rank ``r``."""
    return RANK_1_BB << (8 * r)


def popcount(b: int) -> int:
    return bin(b).count("1")


def lsb(b: int) -> int:
    """Lowest set square; raises ValueError for an empty bitboard."""
    if not b:
        raise ValueError("empty bitboard has no least significant square")
    return (b & -b).bit_length() - 1


def iter_squares(b: int) -> Iterator[int]:
    """Yield the set squares from lowest to highest."""
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def more_than_one(b: int) -> bool:
    return bool(b & (b - 1))


def _step_targets(s: int, steps) -> int:
    f, r = file_of(s), rank_of(s)
    targets = 0
    for df, dr in steps:
        nf, nr = f + df, r + dr
        if 0 <= nf < 8 and 0 <= nr < 8:
            targets |= 1 << make_square(nf, nr)
    return targets


def _slide(s: int, directions, occupied: int) -> int:
    attacks = 0
    for df, dr in directions:
        f, r = file_of(s) + df, rank_of(s) + dr
        while 0 <= f < 8 and 0 <= r < 8:
            bit = 1 << make_square(f, r)
            attacks |= bit
            if occupied & bit:
                break
            f, r = f + df, r + dr
    return attacks


_KNIGHT_ATTACKS = tuple(_step_targets(s, _KNIGHT_STEPS) for s in range(SQUARE_NB))
_KING_ATTACKS = tuple(_step_targets(s, _KING_STEPS) for s in range(SQUARE_NB))
_PAWN_ATTACKS = (
    tuple(_step_targets(s, ((-1, 1), (1, 1))) for s in range(SQUARE_NB)),
    tuple(_step_targets(s, ((-1, -1), (1, -1))) for s in range(SQUARE_NB)),
)


def pawn_attacks_bb(c: int, s: int) -> int:
    """Squares attacked by a pawn of colour ``c`` on ``s``."""
    return _PAWN_ATTACKS[c][s]


def pawn_attacks_from_set(c: int, b: int) -> int:
    """Squares attacked by all pawns of colour ``c`` in bitboard ``b``."""
    not_a = b & ~FILE_A_BB
    not_h = b & ~FILE_H_BB
    if c == WHITE:
        return ((not_h << 9) | (not_a << 7)) & MASK64
    return (not_h >> 7) | (not_a >> 9)


def attacks_bb(pt: int, s: int, occupied: int = 0) -> int:
    """Squares attacked by a non-pawn piece type from ``s``."""
    if pt == KNIGHT:
        return _KNIGHT_ATTACKS[s]
    if pt == KING:
        return _KING_ATTACKS[s]
    if pt == BISHOP:
        return _slide(s, _BISHOP_DIRS, occupied)
    if pt == ROOK:
        return _slide(s, _ROOK_DIRS, occupied)
    if pt == QUEEN:
        return _slide(s, _BISHOP_DIRS + _ROOK_DIRS, occupied)
    if pt == PAWN:
        raise ValueError("pawn attacks depend on colour; use pawn_attacks_bb")
    raise ValueError(f"no attacks for piece type {pt}")


def _build_line_tables():
    line = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    between = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
    for s1 in range(SQUARE_NB):
        for pt in (BISHOP, ROOK):
            from_s1 = attacks_bb(pt, s1)
            for s2 in iter_squares(from_s1):
                line[s1][s2] = (from_s1 & attacks_bb(pt, s2)) | (1 << s1) | (1 << s2)
                between[s1][s2] = (attacks_bb(pt, s1, 1 << s2)
                                   & attacks_bb(pt, s2, 1 << s1))
        for s2 in range(SQUARE_NB):
            between[s1][s2] |= 1 << s2
    return (tuple(tuple(row) for row in line),
            tuple(tuple(row) for row in between))


_LINE_BB, _BETWEEN_BB = _build_line_tables()


def between_bb(s1: int, s2: int) -> int:
    """Squares strictly between ``s1`` and ``s2`` plus ``s2`` itself.

    When the squares share no line or diagonal, only ``s2`` is set.
    """
    return _BETWEEN_BB[s1][s2]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """True if the three squares lie on one straight line."""
    return bool(_LINE_BB[s1][s2] & (1 << s3))


def opposite_colors(s1: int, s2: int) -> bool:
    x = s1 ^ s2
    return bool(((x >> 3) ^ x) & 1)


def _forward_ranks_bb(c: int, s: int) -> int:
    if c == WHITE:
        return ((~RANK_1_BB & MASK64) << (8 * rank_of(s))) & MASK64
    return (~RANK_8_BB & MASK64) >> (8 * (7 - rank_of(s)))


def _adjacent_files_bb(s: int) -> int:
    f = file_bb(s)
    return ((f << 1) & ~FILE_A_BB & MASK64) | ((f >> 1) & ~FILE_H_BB)


def passed_pawn_span(c: int, s: int) -> int:
    """Squares ahead of a pawn on its own and adjacent files."""
    return _forward_ranks_bb(c, s) & (_adjacent_files_bb(s) | file_bb(s))