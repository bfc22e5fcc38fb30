"""Core chess types: colours, pieces, squares, moves, scores and values."""

from __future__ import annotations

from enum import IntEnum, IntFlag

MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1

MAX_MOVES = 256
MAX_PLY = 246


class Color(IntEnum):
    """Side colour; ``~colour`` gives the opponent."""

    WHITE = 0
    BLACK = 1

    def __invert__(self) -> "Color":
        return Color(self ^ 1)


WHITE = Color.WHITE
BLACK = Color.BLACK
COLOR_NB = 2


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6
    ALL_PIECES = 0


NO_PIECE_TYPE = PieceType.NO_PIECE_TYPE
PAWN = PieceType.PAWN
KNIGHT = PieceType.KNIGHT
BISHOP = PieceType.BISHOP
ROOK = PieceType.ROOK
QUEEN = PieceType.QUEEN
KING = PieceType.KING
ALL_PIECES = PieceType.ALL_PIECES
PIECE_TYPE_NB = 8


class Piece(IntEnum):
    NO_PIECE = 0
    W_PAWN = 1
    W_KNIGHT = 2
    W_BISHOP = 3
    W_ROOK = 4
    W_QUEEN = 5
    W_KING = 6
    B_PAWN = 9
    B_KNIGHT = 10
    B_BISHOP = 11
    B_ROOK = 12
    B_QUEEN = 13
    B_KING = 14


NO_PIECE = Piece.NO_PIECE
W_PAWN = Piece.W_PAWN
W_KNIGHT = Piece.W_KNIGHT
W_BISHOP = Piece.W_BISHOP
W_ROOK = Piece.W_ROOK
W_QUEEN = Piece.W_QUEEN
W_KING = Piece.W_KING
B_PAWN = Piece.B_PAWN
B_KNIGHT = Piece.B_KNIGHT
B_BISHOP = Piece.B_BISHOP
B_ROOK = Piece.B_ROOK
B_QUEEN = Piece.B_QUEEN
B_KING = Piece.B_KING
PIECE_NB = 16

PIECES = (W_PAWN, W_KNIGHT, W_BISHOP, W_ROOK, W_QUEEN, W_KING,
          B_PAWN, B_KNIGHT, B_BISHOP, B_ROOK, B_QUEEN, B_KING)


class MoveType(IntEnum):
    NORMAL = 0
    PROMOTION = 1 << 14
    EN_PASSANT = 2 << 14
    CASTLING = 3 << 14


NORMAL = MoveType.NORMAL
PROMOTION = MoveType.PROMOTION
EN_PASSANT = MoveType.EN_PASSANT
CASTLING = MoveType.CASTLING

MOVE_NONE = 0
MOVE_NULL = 65


class CastlingRights(IntFlag):
    NO_CASTLING = 0
    WHITE_OO = 1
    WHITE_OOO = 2
    BLACK_OO = 4
    BLACK_OOO = 8
    KING_SIDE = 5
    QUEEN_SIDE = 10
    WHITE_CASTLING = 3
    BLACK_CASTLING = 12
    ANY_CASTLING = 15


NO_CASTLING = CastlingRights.NO_CASTLING
WHITE_OO = CastlingRights.WHITE_OO
WHITE_OOO = CastlingRights.WHITE_OOO
BLACK_OO = CastlingRights.BLACK_OO
BLACK_OOO = CastlingRights.BLACK_OOO
KING_SIDE = CastlingRights.KING_SIDE
QUEEN_SIDE = CastlingRights.QUEEN_SIDE
WHITE_CASTLING = CastlingRights.WHITE_CASTLING
BLACK_CASTLING = CastlingRights.BLACK_CASTLING
ANY_CASTLING = CastlingRights.ANY_CASTLING
CASTLING_RIGHT_NB = 16


class Bound(IntFlag):
    NONE = 0
    UPPER = 1
    LOWER = 2
    EXACT = 3


# Game phases and scale factors
PHASE_ENDGAME = 0
PHASE_MIDGAME = 128
MG = 0
EG = 1
PHASE_NB = 2

SCALE_FACTOR_DRAW = 0
SCALE_FACTOR_NORMAL = 64
SCALE_FACTOR_MAX = 128
SCALE_FACTOR_NONE = 255

# Values
VALUE_ZERO = 0
VALUE_DRAW = 0
VALUE_KNOWN_WIN = 10000
VALUE_MATE = 32000
VALUE_INFINITE = 32001
VALUE_NONE = 32002

VALUE_TB_WIN_IN_MAX_PLY = VALUE_MATE - 2 * MAX_PLY
VALUE_TB_LOSS_IN_MAX_PLY = -VALUE_TB_WIN_IN_MAX_PLY
VALUE_MATE_IN_MAX_PLY = VALUE_MATE - MAX_PLY
VALUE_MATED_IN_MAX_PLY = -VALUE_MATE_IN_MAX_PLY

PAWN_VALUE_MG, PAWN_VALUE_EG = 126, 208
KNIGHT_VALUE_MG, KNIGHT_VALUE_EG = 781, 854
BISHOP_VALUE_MG, BISHOP_VALUE_EG = 825, 915
ROOK_VALUE_MG, ROOK_VALUE_EG = 1276, 1380
QUEEN_VALUE_MG, QUEEN_VALUE_EG = 2538, 2682

MIDGAME_LIMIT = 15258
ENDGAME_LIMIT = 3915

_MG_VALUES = (VALUE_ZERO, PAWN_VALUE_MG, KNIGHT_VALUE_MG, BISHOP_VALUE_MG,
              ROOK_VALUE_MG, QUEEN_VALUE_MG, VALUE_ZERO, VALUE_ZERO)
_EG_VALUES = (VALUE_ZERO, PAWN_VALUE_EG, KNIGHT_VALUE_EG, BISHOP_VALUE_EG,
              ROOK_VALUE_EG, QUEEN_VALUE_EG, VALUE_ZERO, VALUE_ZERO)

PIECE_VALUE = (_MG_VALUES * 2, _EG_VALUES * 2)

# Depths
DEPTH_QS_CHECKS = 0
DEPTH_QS_NO_CHECKS = -1
DEPTH_QS_RECAPTURES = -5
DEPTH_NONE = -6
DEPTH_OFFSET = -7

# Squares
(SQ_A1, SQ_B1, SQ_C1, SQ_D1, SQ_E1, SQ_F1, SQ_G1, SQ_H1) = range(0, 8)
(SQ_A2, SQ_B2, SQ_C2, SQ_D2, SQ_E2, SQ_F2, SQ_G2, SQ_H2) = range(8, 16)
(SQ_A3, SQ_B3, SQ_C3, SQ_D3, SQ_E3, SQ_F3, SQ_G3, SQ_H3) = range(16, 24)
(SQ_A4, SQ_B4, SQ_C4, SQ_D4, SQ_E4, SQ_F4, SQ_G4, SQ_H4) = range(24, 32)
(SQ_A5, SQ_B5, SQ_C5, SQ_D5, SQ_E5, SQ_F5, SQ_G5, SQ_H5) = range(32, 40)
(SQ_A6, SQ_B6, SQ_C6, SQ_D6, SQ_E6, SQ_F6, SQ_G6, SQ_H6) = range(40, 48)
(SQ_A7, SQ_B7, SQ_C7, SQ_D7, SQ_E7, SQ_F7, SQ_G7, SQ_H7) = range(48, 56)
(SQ_A8, SQ_B8, SQ_C8, SQ_D8, SQ_E8, SQ_F8, SQ_G8, SQ_H8) = range(56, 64)
SQ_NONE = 64
SQUARE_ZERO = 0
SQUARE_NB = 64

# Directions
NORTH = 8
EAST = 1
SOUTH = -NORTH
WEST = -EAST
NORTH_EAST = NORTH + EAST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST
NORTH_WEST = NORTH + WEST

# Files and ranks
FILE_A, FILE_B, FILE_C, FILE_D, FILE_E, FILE_F, FILE_G, FILE_H = range(8)
FILE_NB = 8
RANK_1, RANK_2, RANK_3, RANK_4, RANK_5, RANK_6, RANK_7, RANK_8 = range(8)
RANK_NB = 8

SCORE_ZERO = 0


def _int16(v: int) -> int:
    v &= 0xFFFF
    return v - 0x10000 if v & 0x8000 else v


def _int32(v: int) -> int:
    v &= _MASK32
    return v - (1 << 32) if v & 0x80000000 else v


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def make_score(mg: int, eg: int) -> int:
    """Pack a middlegame and an endgame value into one integer score."""
    return _int32(((eg << 16) & _MASK32) + mg)


def mg_value(s: int) -> int:
    """Middlegame part of a packed score."""
    return _int16(s)


def eg_value(s: int) -> int:
    """Endgame part of a packed score."""
    return _int16(((s + 0x8000) & _MASK32) >> 16)


def score_div(s: int, i: int) -> int:
    """Divide each half of a score by ``i``, rounding towards zero."""
    return make_score(_trunc_div(mg_value(s), i), _trunc_div(eg_value(s), i))


def make_square(f: int, r: int) -> int:
    return (r << 3) + f


def make_piece(c: int, pt: int) -> Piece:
    """Coloured piece; raises ValueError when no such piece exists."""
    return Piece((c << 3) + pt)


def type_of(pc: int) -> PieceType:
    return PieceType(pc & 7)


def color_of(pc: int) -> Color:
    if pc == NO_PIECE:
        raise ValueError("an empty square has no colour")
    return Color(pc >> 3)


def flip_piece(pc: int) -> Piece:
    """Same piece type, other colour."""
    return Piece(pc ^ 8)


def file_of(s: int) -> int:
    return s & 7


def rank_of(s: int) -> int:
    return s >> 3


def flip_rank(s: int) -> int:
    """Mirror a square vertically (A1 <-> A8)."""
    return s ^ SQ_A8


def flip_file(s: int) -> int:
    """Mirror a square horizontally (A1 <-> H1)."""
    return s ^ SQ_H1


def relative_square(c: int, s: int) -> int:
    return s ^ (c * 56)


def relative_rank(c: int, r: int) -> int:
    return r ^ (c * 7)


def relative_rank_of(c: int, s: int) -> int:
    return relative_rank(c, rank_of(s))


def pawn_push(c: int) -> int:
    return NORTH if c == WHITE else SOUTH


def castling_for(c: int, cr: int) -> CastlingRights:
    """The part of ``cr`` that belongs to colour ``c``."""
    own = WHITE_CASTLING if c == WHITE else BLACK_CASTLING
    return CastlingRights(own & cr)


def from_sq(m: int) -> int:
    return (m >> 6) & 0x3F


def to_sq(m: int) -> int:
    return m & 0x3F


def from_to(m: int) -> int:
    return m & 0xFFF


def move_type(m: int) -> MoveType:
    return MoveType(m & (3 << 14))


def promotion_type(m: int) -> PieceType:
    return PieceType(((m >> 12) & 3) + KNIGHT)


def make_move(origin: int, target: int) -> int:
    return (origin << 6) + target


def make(kind: int, origin: int, target: int, pt: int = KNIGHT) -> int:
    """Encode a move of the given type, with a promotion piece if any."""
    return kind + ((pt - KNIGHT) << 12) + (origin << 6) + target


def is_ok_square(s: int) -> bool:
    return SQ_A1 <= s <= SQ_H8


def is_ok_move(m: int) -> bool:
    """False for MOVE_NONE and MOVE_NULL."""
    return from_sq(m) != to_sq(m)


def mate_in(ply: int) -> int:
    return VALUE_MATE - ply


def mated_in(ply: int) -> int:
    return -VALUE_MATE + ply


def make_key(seed: int) -> int:
    """64-bit key from a seed by a linear congruential step."""
    return (seed * 6364136223846793005 + 1442695040888963407) & MASK64


def square_name(s: int) -> str:
    """Algebraic name of a square, such as ``e4``."""
    if not is_ok_square(s):
        raise ValueError(f"not a board square: {s}")
    return "abcdefgh"[file_of(s)] + str(rank_of(s) + 1)