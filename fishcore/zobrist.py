"""Zobrist hashing keys and cuckoo tables for upcoming-repetition detection."""

from __future__ import annotations

from .bitboards import attacks_bb
from .types import (
    CASTLING_RIGHT_NB,
    FILE_NB,
    MASK64,
    MOVE_NONE,
    PAWN,
    PIECE_NB,
    PIECES,
    SQUARE_NB,
    make_move,
    type_of,
)

CUCKOO_SIZE = 8192
_ZOBRIST_SEED = 1070372


class Prng:
    """Xorshift64* pseudo-random generator producing 64-bit keys."""

    def __init__(self, seed: int) -> None:
        if not seed:
            raise ValueError("the generator needs a non-zero seed")
        self._state = seed & MASK64

    def rand(self) -> int:
        """Next 64-bit pseudo-random number."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & MASK64
        s ^= s >> 27
        self._state = s
        return (s * 2685821657736338717) & MASK64


def h1(key: int) -> int:
    """First cuckoo hash: the low 13 bits of the key."""
    return key & 0x1FFF


def h2(key: int) -> int:
    """Second cuckoo hash: 13 bits starting at bit 16."""
    return (key >> 16) & 0x1FFF


def _build_keys():
    rng = Prng(_ZOBRIST_SEED)
    psq = [[0] * SQUARE_NB for _ in range(PIECE_NB)]
    for pc in PIECES:
        psq[pc] = [rng.rand() for _ in range(SQUARE_NB)]
    enpassant = tuple(rng.rand() for _ in range(FILE_NB))
    castling = tuple(rng.rand() for _ in range(CASTLING_RIGHT_NB))
    side = rng.rand()
    no_pawns = rng.rand()
    return tuple(tuple(row) for row in psq), enpassant, castling, side, no_pawns


PSQ, ENPASSANT, CASTLING, SIDE, NO_PAWNS = _build_keys()


def _build_cuckoo():
    keys = [0] * CUCKOO_SIZE
    moves = [MOVE_NONE] * CUCKOO_SIZE
    for pc in PIECES:
        pt = type_of(pc)
        if pt == PAWN:
            continue
        for s1 in range(SQUARE_NB):
            targets = attacks_bb(pt, s1, 0)
            for s2 in range(s1 + 1, SQUARE_NB):
                if not targets & (1 << s2):
                    continue
                move = make_move(s1, s2)
                key = PSQ[pc][s1] ^ PSQ[pc][s2] ^ SIDE
                i = h1(key)
                while True:
                    keys[i], key = key, keys[i]
                    moves[i], move = move, moves[i]
                    if move == MOVE_NONE:
                        break
                    # Push the evicted entry to its alternative slot
                    i = h2(key) if i == h1(key) else h1(key)
    return tuple(keys), tuple(moves)


CUCKOO_KEYS, CUCKOO_MOVES = _build_cuckoo()


def cuckoo_lookup(key: int) -> int:
    """Reversible move whose hash difference is ``key``, or MOVE_NONE."""
    for j in (h1(key), h2(key)):
        if CUCKOO_KEYS[j] == key:
            return CUCKOO_MOVES[j]
    return MOVE_NONE


def cuckoo_count() -> int:
    """Number of reversible moves stored in the cuckoo tables."""
    return sum(1 for m in CUCKOO_MOVES if m != MOVE_NONE)