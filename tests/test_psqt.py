from fishcore import psqt
from fishcore import types as t

WHITE_PIECES = (t.W_PAWN, t.W_KNIGHT, t.W_BISHOP, t.W_ROOK, t.W_QUEEN, t.W_KING)


def test_table_shape_matches_lookup():
    table = psqt.build_psq_table()
    assert len(table) == t.PIECE_NB
    assert all(len(row) == t.SQUARE_NB for row in table)
    for pc in t.PIECES:
        for s in range(t.SQUARE_NB):
            assert table[pc][s] == psqt.psq_score(pc, s)


def test_black_is_negated_mirror_of_white():
    for pc in WHITE_PIECES:
        for s in range(t.SQUARE_NB):
            black = psqt.psq_score(t.flip_piece(pc), t.flip_rank(s))
            assert black == -psqt.psq_score(pc, s)


def test_non_pawn_pieces_symmetric_across_files():
    for pc in WHITE_PIECES[1:]:
        for s in range(t.SQUARE_NB):
            assert psqt.psq_score(pc, s) == psqt.psq_score(pc, t.flip_file(s))


def test_empty_square_entries_are_zero():
    assert all(psqt.psq_score(t.NO_PIECE, s) == 0 for s in range(t.SQUARE_NB))


def test_pawn_on_back_rank_is_pure_material():
    for f in range(t.FILE_NB):
        s = t.make_square(f, t.RANK_1)
        score = psqt.psq_score(t.W_PAWN, s)
        assert t.mg_value(score) == t.PAWN_VALUE_MG
        assert t.eg_value(score) == t.PAWN_VALUE_EG


def test_knight_corner_bonus():
    score = psqt.psq_score(t.W_KNIGHT, t.SQ_A1)
    assert t.mg_value(score) - t.KNIGHT_VALUE_MG == -175
    assert t.eg_value(score) - t.KNIGHT_VALUE_EG == -96


def test_king_has_no_material():
    score = psqt.psq_score(t.W_KING, t.SQ_A1)
    assert t.mg_value(score) == 271
    assert t.eg_value(score) == 1