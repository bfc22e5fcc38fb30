import pytest

from fishcore import types as t


@pytest.mark.parametrize(
    "mg, eg",
    [(0, 0), (1, -1), (-175, -96), (2538, 2682), (-32768, 32767), (32767, -32768)],
)
def test_score_round_trip(mg, eg):
    s = t.make_score(mg, eg)
    assert t.mg_value(s) == mg
    assert t.eg_value(s) == eg


def test_score_addition_and_negation():
    a = t.make_score(-175, -96)
    b = t.make_score(49, 28)
    total = a + b
    assert t.mg_value(total) == -175 + 49
    assert t.eg_value(total) == -96 + 28
    assert t.mg_value(-a) == 175
    assert t.eg_value(-a) == 96


@pytest.mark.parametrize("mg, eg, k", [(12, -30, 3), (-81, 45, 9), (0, 100, 4)])
def test_score_div_exact(mg, eg, k):
    assert t.score_div(t.make_score(mg * k, eg * k), k) == t.make_score(mg, eg)


def test_score_div_truncates_towards_zero():
    left = t.score_div(t.make_score(-7, 7), 2)
    right = t.score_div(t.make_score(7, -7), 2)
    assert t.mg_value(left) == -t.mg_value(right)
    assert t.eg_value(left) == -t.eg_value(right)


def test_square_round_trip():
    for s in range(t.SQUARE_NB):
        assert t.make_square(t.file_of(s), t.rank_of(s)) == s


def test_piece_round_trip():
    for c in t.Color:
        for pt in (t.PAWN, t.KNIGHT, t.BISHOP, t.ROOK, t.QUEEN, t.KING):
            pc = t.make_piece(c, pt)
            assert t.type_of(pc) == pt
            assert t.color_of(pc) == c


def test_color_of_empty_raises():
    with pytest.raises(ValueError):
        t.color_of(t.NO_PIECE)


def test_flip_piece():
    for pc in t.PIECES:
        flipped = t.flip_piece(pc)
        assert t.type_of(flipped) == t.type_of(pc)
        assert t.color_of(flipped) == ~t.color_of(pc)
        assert t.flip_piece(flipped) == pc


def test_color_invert():
    white_pawn = t.make_piece(t.WHITE, t.PAWN)
    black_pawn = t.make_piece(t.BLACK, t.PAWN)
    assert t.color_of(black_pawn) == ~t.WHITE
    assert t.color_of(white_pawn) == ~t.BLACK
    assert t.make_piece(~t.WHITE, t.PAWN) == black_pawn
    assert t.make_piece(~t.BLACK, t.PAWN) == white_pawn


def test_flip_squares():
    assert t.flip_rank(t.SQ_A1) == t.SQ_A8
    assert t.flip_file(t.SQ_A1) == t.SQ_H1
    for s in range(t.SQUARE_NB):
        assert t.flip_rank(t.flip_rank(s)) == s
        assert t.file_of(t.flip_rank(s)) == t.file_of(s)


def test_relative_square_and_rank():
    assert t.relative_square(t.BLACK, t.SQ_H1) == t.SQ_H8
    assert t.relative_square(t.WHITE, t.SQ_H1) == t.SQ_H1
    assert t.relative_rank(t.BLACK, t.RANK_1) == t.RANK_8
    assert t.relative_rank_of(t.BLACK, t.SQ_E7) == t.RANK_2


def test_pawn_push():
    assert t.pawn_push(t.WHITE) == t.NORTH
    assert t.pawn_push(t.BLACK) == t.SOUTH


def test_castling_for():
    assert t.castling_for(t.WHITE, t.KING_SIDE) == t.WHITE_OO
    assert t.castling_for(t.BLACK, t.QUEEN_SIDE) == t.BLACK_OOO
    assert t.castling_for(t.BLACK, t.ANY_CASTLING) == t.BLACK_CASTLING


def test_move_encoding_round_trip():
    m = t.make_move(t.SQ_E2, t.SQ_E4)
    assert t.from_sq(m) == t.SQ_E2
    assert t.to_sq(m) == t.SQ_E4
    assert t.move_type(m) == t.NORMAL
    assert t.from_to(m) == m
    assert t.is_ok_move(m)


@pytest.mark.parametrize("pt", [t.KNIGHT, t.BISHOP, t.ROOK, t.QUEEN])
def test_promotion_encoding(pt):
    m = t.make(t.PROMOTION, t.SQ_A7, t.SQ_A8, pt)
    assert t.move_type(m) == t.PROMOTION
    assert t.promotion_type(m) == pt
    assert t.from_sq(m) == t.SQ_A7
    assert t.to_sq(m) == t.SQ_A8
    assert t.from_to(m) == t.make_move(t.SQ_A7, t.SQ_A8)


def test_special_moves_not_ok():
    assert not t.is_ok_move(t.MOVE_NONE)
    assert not t.is_ok_move(t.MOVE_NULL)


def test_mate_scores():
    assert t.mate_in(0) == t.VALUE_MATE
    for ply in (0, 5, t.MAX_PLY):
        assert t.mated_in(ply) == -t.mate_in(ply)


def test_make_key_fixed_point():
    assert t.make_key(0) == 1442695040888963407
    assert 0 <= t.make_key(2 ** 64 - 1) < 2 ** 64


def test_square_name():
    assert t.square_name(t.SQ_E4) == "e4"
    names = {t.square_name(s) for s in range(t.SQUARE_NB)}
    assert len(names) == t.SQUARE_NB
    with pytest.raises(ValueError):
        t.square_name(t.SQ_NONE)