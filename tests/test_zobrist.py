import pytest

from fishcore import zobrist
from fishcore.types import (
    B_QUEEN,
    MASK64,
    MOVE_NONE,
    PIECES,
    SQ_A1,
    SQ_D8,
    SQ_E2,
    SQ_E3,
    SQ_F3,
    SQ_G1,
    SQ_H8,
    W_KNIGHT,
    W_PAWN,
    make_move,
)

SEED = 1070372


def test_prng_is_deterministic():
    a = zobrist.Prng(SEED)
    b = zobrist.Prng(SEED)
    assert [a.rand() for _ in range(10)] == [b.rand() for _ in range(10)]


def test_prng_values_fit_in_64_bits():
    rng = zobrist.Prng(42)
    values = [rng.rand() for _ in range(200)]
    assert all(0 <= v <= MASK64 for v in values)
    assert len(set(values)) == len(values)


def test_prng_different_seeds_differ():
    assert zobrist.Prng(1).rand() != zobrist.Prng(2).rand()


def test_prng_rejects_zero_seed():
    with pytest.raises(ValueError):
        zobrist.Prng(0)


def test_hash_functions_range():
    for key in (0, MASK64, 0x123456789ABCDEF0):
        assert 0 <= zobrist.h1(key) < zobrist.CUCKOO_SIZE
        assert 0 <= zobrist.h2(key) < zobrist.CUCKOO_SIZE


def test_hash_functions_pick_bits():
    assert zobrist.h1(0x1FFF) == 0x1FFF
    assert zobrist.h2(0x1FFF) == 0
    assert zobrist.h2(1 << 16) == 1


def test_cuckoo_count_matches_reversible_moves():
    assert zobrist.cuckoo_count() == 3668


def test_every_entry_sits_in_one_of_its_slots():
    for i, (key, move) in enumerate(zip(zobrist.CUCKOO_KEYS, zobrist.CUCKOO_MOVES)):
        if move != MOVE_NONE:
            assert i in (zobrist.h1(key), zobrist.h2(key))


def test_lookup_knight_move():
    key = zobrist.PSQ[W_KNIGHT][SQ_G1] ^ zobrist.PSQ[W_KNIGHT][SQ_F3] ^ zobrist.SIDE
    assert zobrist.cuckoo_lookup(key) == make_move(SQ_G1, SQ_F3)


def test_lookup_pawn_move_absent():
    key = zobrist.PSQ[W_PAWN][SQ_E2] ^ zobrist.PSQ[W_PAWN][SQ_E3] ^ zobrist.SIDE
    assert zobrist.cuckoo_lookup(key) == MOVE_NONE


def test_lookup_unreachable_knight_move_absent():
    key = zobrist.PSQ[W_KNIGHT][SQ_A1] ^ zobrist.PSQ[W_KNIGHT][SQ_H8] ^ zobrist.SIDE
    assert zobrist.cuckoo_lookup(key) == MOVE_NONE


def test_keys_are_distinct():
    keys = [zobrist.PSQ[pc][s] for pc in PIECES for s in range(64)]
    keys += list(zobrist.ENPASSANT) + list(zobrist.CASTLING)
    keys += [zobrist.SIDE, zobrist.NO_PAWNS]
    assert len(keys) == 12 * 64 + 8 + 16 + 2
    assert len(set(keys)) == len(keys)
    assert keys[0] == zobrist.Prng(SEED).rand()


def test_empty_piece_rows_are_zero():
    assert all(k == 0 for k in zobrist.PSQ[0])
    assert len(zobrist.ENPASSANT) == 8
    assert len(zobrist.CASTLING) == 16
    rng = zobrist.Prng(SEED)
    for _ in range(12 * 64):
        rng.rand()
    assert rng.rand() == zobrist.ENPASSANT[0]