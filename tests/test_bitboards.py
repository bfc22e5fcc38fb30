import pytest

from fishcore import bitboards as bb
from fishcore import types as t


def test_single_square_bitboards():
    for s in range(t.SQUARE_NB):
        b = bb.square_bb(s)
        assert bb.popcount(b) == 1
        assert bb.lsb(b) == s
        assert not bb.more_than_one(b)


def test_lsb_of_empty_raises():
    with pytest.raises(ValueError):
        bb.lsb(0)


def test_iter_squares_sorted_and_complete():
    b = bb.square_bb(t.SQ_H8) | bb.square_bb(t.SQ_A1) | bb.square_bb(t.SQ_E4)
    squares = list(bb.iter_squares(b))
    assert squares == [t.SQ_A1, t.SQ_E4, t.SQ_H8]
    assert bb.more_than_one(b)
    assert list(bb.iter_squares(0)) == []


def test_file_and_rank_bitboards():
    for s in range(t.SQUARE_NB):
        f = bb.file_bb(s)
        r = bb.rank_bb(t.rank_of(s))
        assert bb.popcount(f) == t.FILE_NB
        assert bb.popcount(r) == t.RANK_NB
        assert f & r == bb.square_bb(s)


@pytest.mark.parametrize("pt", [t.KNIGHT, t.KING, t.BISHOP, t.ROOK, t.QUEEN])
def test_attacks_are_symmetric(pt):
    pairs = {
        (s1, s2)
        for s1 in range(t.SQUARE_NB)
        for s2 in bb.iter_squares(bb.attacks_bb(pt, s1))
    }
    assert len(pairs) > 0
    assert pairs == {(s2, s1) for s1, s2 in pairs}


def test_knight_in_corner_and_rook_on_empty_board():
    assert bb.popcount(bb.attacks_bb(t.KNIGHT, t.SQ_A1)) == 2
    for s in range(t.SQUARE_NB):
        assert bb.popcount(bb.attacks_bb(t.ROOK, s)) == 14


def test_queen_is_rook_plus_bishop():
    occ = bb.square_bb(t.SQ_D5) | bb.square_bb(t.SQ_F3) | bb.square_bb(t.SQ_B1)
    for s in range(t.SQUARE_NB):
        assert bb.attacks_bb(t.QUEEN, s, occ) == (
            bb.attacks_bb(t.ROOK, s, occ) | bb.attacks_bb(t.BISHOP, s, occ)
        )


def test_blocked_slider_stops_at_blocker():
    occ = bb.square_bb(t.SQ_A4)
    att = bb.attacks_bb(t.ROOK, t.SQ_A1, occ)
    assert att & bb.square_bb(t.SQ_A4)
    assert not att & bb.square_bb(t.SQ_A5)
    assert att & bb.attacks_bb(t.ROOK, t.SQ_A1) == att


def test_pawn_attacks_need_colour():
    with pytest.raises(ValueError):
        bb.attacks_bb(t.PAWN, t.SQ_E4)


def test_pawn_attacks_single_square():
    assert bb.pawn_attacks_bb(t.WHITE, t.SQ_E4) == (
        bb.square_bb(t.SQ_D5) | bb.square_bb(t.SQ_F5)
    )


@pytest.mark.parametrize("c", [t.WHITE, t.BLACK])
def test_pawn_attacks_from_set_matches_union(c):
    pawns = [t.SQ_A2, t.SQ_H3, t.SQ_D4, t.SQ_E7, t.SQ_A5, t.SQ_H6]
    b = 0
    expected = 0
    for s in pawns:
        b |= bb.square_bb(s)
        expected |= bb.pawn_attacks_bb(c, s)
    assert bb.pawn_attacks_from_set(c, b) == expected


def test_between_always_holds_target():
    for s1 in range(t.SQUARE_NB):
        for s2 in range(t.SQUARE_NB):
            between = bb.between_bb(s1, s2)
            assert (between & bb.square_bb(s2)) == bb.square_bb(s2)
            if s1 != s2:
                assert (between & bb.square_bb(s1)) == 0


def test_between_squares_are_aligned():
    for s1, s2 in [(t.SQ_A1, t.SQ_H8), (t.SQ_E1, t.SQ_E8), (t.SQ_A3, t.SQ_H3)]:
        inner = bb.between_bb(s1, s2) ^ bb.square_bb(s2)
        assert inner
        for s in bb.iter_squares(inner):
            assert bb.aligned(s1, s2, s)


def test_knight_jump_not_aligned():
    assert not bb.aligned(t.SQ_A1, t.SQ_B3, t.SQ_C5)
    assert bb.between_bb(t.SQ_A1, t.SQ_B3) == bb.square_bb(t.SQ_B3)


def test_opposite_colors_agrees_with_dark_squares():
    for s1 in range(t.SQUARE_NB):
        assert not bb.opposite_colors(s1, s1)
        for s2 in range(t.SQUARE_NB):
            d1 = bool(bb.DARK_SQUARES & bb.square_bb(s1))
            d2 = bool(bb.DARK_SQUARES & bb.square_bb(s2))
            assert bb.opposite_colors(s1, s2) == (d1 != d2)


def test_passed_pawn_span():
    span = bb.passed_pawn_span(t.WHITE, t.SQ_E2)
    assert not span & (bb.rank_bb(t.RANK_1) | bb.rank_bb(t.RANK_2))
    for s in (t.SQ_D8, t.SQ_E8, t.SQ_F8, t.SQ_E3):
        assert span & bb.square_bb(s)
    assert not span & bb.square_bb(t.SQ_A8)
    for s in range(t.SQUARE_NB):
        mirrored = 0
        for x in bb.iter_squares(bb.passed_pawn_span(t.WHITE, s)):
            mirrored |= bb.square_bb(t.flip_rank(x))
        assert mirrored == bb.passed_pawn_span(t.BLACK, t.flip_rank(s))