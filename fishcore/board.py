"""Board representation: piece placement, FEN input/output and derived state."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Optional

from .bitboards import (
    DARK_SQUARES,
    RANK_1_BB,
    RANK_8_BB,
    attacks_bb,
    between_bb,
    file_bb,
    iter_squares,
    lsb,
    more_than_one,
    opposite_colors,
    passed_pawn_span,
    pawn_attacks_bb,
    pawn_attacks_from_set,
    popcount,
    square_bb,
)
from .psqt import psq_score as _psq_of
from .types import (
    ALL_PIECES,
    ANY_CASTLING,
    BISHOP,
    BLACK,
    BLACK_OO,
    BLACK_OOO,
    COLOR_NB,
    CASTLING_RIGHT_NB,
    KING,
    KING_SIDE,
    KNIGHT,
    MASK64,
    MG,
    NO_PIECE,
    PAWN,
    PIECE_NB,
    PIECE_TYPE_NB,
    PIECE_VALUE,
    PIECES,
    QUEEN,
    QUEEN_SIDE,
    RANK_1,
    RANK_6,
    ROOK,
    SQ_A8,
    SQ_C1,
    SQ_D1,
    SQ_F1,
    SQ_G1,
    SQ_H1,
    SQ_NONE,
    SQUARE_NB,
    WHITE,
    WHITE_OO,
    WHITE_OOO,
    CastlingRights,
    Color,
    Piece,
    castling_for,
    color_of,
    eg_value,
    file_of,
    from_sq,
    is_ok_square,
    make_key,
    make_piece,
    make_square,
    pawn_push,
    relative_rank,
    relative_rank_of,
    relative_square,
    square_name,
    type_of,
)
from .zobrist import CASTLING, ENPASSANT, NO_PAWNS, PSQ, SIDE

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_PIECE_TO_CHAR = " PNBRQK  pnbrqk"
_CHAR_TO_PIECE = {ch: Piece(i) for i, ch in enumerate(_PIECE_TO_CHAR) if ch != " "}
_SINGLE_RIGHTS = (WHITE_OO, WHITE_OOO, BLACK_OO, BLACK_OOO)
_LEADING_INT = re.compile(r"[+-]?\d+")


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else None


@dataclass
class StateInfo:
    """Position data that is restored when a move is taken back."""

    # Carried over when a move is made
    pawn_key: int = 0
    material_key: int = 0
    non_pawn_material: list = field(default_factory=lambda: [0, 0])
    castling_rights: int = 0
    rule50: int = 0
    plies_from_null: int = 0
    ep_square: int = SQ_NONE

    # Recomputed after every move
    key: int = 0
    checkers_bb: int = 0
    previous: Optional["StateInfo"] = None
    blockers_for_king: list = field(default_factory=lambda: [0, 0])
    pinners: list = field(default_factory=lambda: [0, 0])
    check_squares: list = field(default_factory=lambda: [0] * PIECE_TYPE_NB)
    captured_piece: int = NO_PIECE
    repetition: int = 0


class Board:
    """Piece placement, side to move, castling data and hash keys."""

    def __init__(self, fen: str = START_FEN, chess960: bool = False) -> None:
        self.set(fen, chess960)

    def _reset(self) -> None:
        self._board = [NO_PIECE] * SQUARE_NB
        self._by_type = [0] * PIECE_TYPE_NB
        self._by_color = [0] * COLOR_NB
        self._piece_count = [0] * PIECE_NB
        self._castling_rights_mask = [0] * SQUARE_NB
        self._castling_rook_square = [SQ_NONE] * CASTLING_RIGHT_NB
        self._castling_path = [0] * CASTLING_RIGHT_NB
        self.st = StateInfo()
        self._game_ply = 0
        self._side_to_move = WHITE
        self._psq = 0
        self._chess960 = False

    # ----------------------------------------------------------------- FEN

    def set(self, fen: str, chess960: bool = False) -> "Board":
        """Set up the board from a FEN string (Shredder and X-FEN castling too).

        Raises ValueError when a side has no single king or a castling
        right names no rook.
        """
        self._reset()
        fields = fen.split()
        if not fields:
            raise ValueError("empty FEN string")

        sq = SQ_A8
        for ch in fields[0]:
            if ch in "0123456789":
                sq += int(ch)
            elif ch == "/":
                sq -= 16
            elif ch in _CHAR_TO_PIECE:
                if not is_ok_square(sq):
                    raise ValueError(f"piece placement runs off the board: {fields[0]}")
                self.put_piece(_CHAR_TO_PIECE[ch], sq)
                sq += 1

        color = fields[1] if len(fields) > 1 else ""
        self._side_to_move = WHITE if color == "w" else BLACK

        for token in fields[2] if len(fields) > 2 else "":
            c = BLACK if token.islower() else WHITE
            rook = make_piece(c, ROOK)
            upper = token.upper()
            back_rank = relative_rank(c, RANK_1)
            if upper == "K":
                files = range(7, -1, -1)
            elif upper == "Q":
                files = range(8)
            elif "A" <= upper <= "H":
                self._set_castling_right(c, make_square(ord(upper) - ord("A"), back_rank))
                continue
            else:
                continue
            rsq = next((make_square(f, back_rank) for f in files
                        if self._board[make_square(f, back_rank)] == rook), None)
            if rsq is None:
                raise ValueError(f"no rook for castling right {token!r}")
            self._set_castling_right(c, rsq)

        stm = self._side_to_move
        enpassant = False
        ep = fields[3] if len(fields) > 3 else ""
        if (len(ep) >= 2 and "a" <= ep[0] <= "h"
                and ep[1] == ("6" if stm == WHITE else "3")):
            ep_sq = make_square(ord(ep[0]) - ord("a"), int(ep[1]) - 1)
            self.st.ep_square = ep_sq
            enpassant = bool(
                pawn_attacks_bb(~stm, ep_sq) & self.pieces(stm, PAWN)
                and self.pieces(~stm, PAWN) & square_bb(ep_sq + pawn_push(~stm))
                and not self.pieces() & (square_bb(ep_sq) | square_bb(ep_sq + pawn_push(stm)))
            )
        if not enpassant:
            self.st.ep_square = SQ_NONE

        rule50 = _leading_int(fields[4]) if len(fields) > 4 else None
        fullmove = None
        if rule50 is not None and len(fields) > 5:
            fullmove = _leading_int(fields[5])
        self.st.rule50 = rule50 or 0
        fullmove = fullmove or 0
        self._game_ply = max(2 * (fullmove - 1), 0) + (stm == BLACK)

        self._chess960 = chess960
        self._set_state(self.st)
        return self

    def set_code(self, code: str, c: Color) -> "Board":
        """Set up a position from an endgame code such as ``KBPKN``.

        The side named first is the strong one and gets colour ``c``.
        """
        if not code.startswith("K"):
            raise ValueError(f"endgame code must start with a king: {code!r}")
        second_king = code.find("K", 1)
        if second_king < 0:
            raise ValueError(f"endgame code needs two kings: {code!r}")
        v = code.find("v")
        strong_end = second_king if v < 0 else min(v, second_king)
        sides = [code[second_king:], code[:strong_end]]
        for side in sides:
            if not 0 < len(side) < 8:
                raise ValueError(f"bad endgame code: {code!r}")
        sides[c] = sides[c].lower()
        fen = (f"8/{sides[0]}{8 - len(sides[0])}/8/8/8/8/"
               f"{sides[1]}{8 - len(sides[1])}/8 w - - 0 10")
        return self.set(fen, False)

    def fen(self) -> str:
        """FEN of the position; Shredder-FEN castling letters in Chess960."""
        rows = []
        for r in range(7, -1, -1):
            row, empty = [], 0
            for f in range(8):
                pc = self._board[make_square(f, r)]
                if pc == NO_PIECE:
                    empty += 1
                    continue
                if empty:
                    row.append(str(empty))
                    empty = 0
                row.append(_PIECE_TO_CHAR[pc])
            if empty:
                row.append(str(empty))
            rows.append("".join(row))

        castling = ""
        for cr, letter, base in ((WHITE_OO, "K", "A"), (WHITE_OOO, "Q", "A"),
                                 (BLACK_OO, "k", "a"), (BLACK_OOO, "q", "a")):
            if self.can_castle(cr):
                if self._chess960:
                    castling += chr(ord(base) + file_of(self.castling_rook_square(cr)))
                else:
                    castling += letter
        castling = castling or "-"

        ep = "-" if self.ep_square() == SQ_NONE else square_name(self.ep_square())
        fullmove = 1 + (self._game_ply - (self._side_to_move == BLACK)) // 2
        side = "w" if self._side_to_move == WHITE else "b"
        return f"{'/'.join(rows)} {side} {castling} {ep} {self.st.rule50} {fullmove}"

    def __str__(self) -> str:
        sep = " +---+---+---+---+---+---+---+---+\n"
        lines = ["\n", sep]
        for r in range(7, -1, -1):
            cells = "".join(f" | {_PIECE_TO_CHAR[self._board[make_square(f, r)]]}"
                            for f in range(8))
            lines.append(f"{cells} | {r + 1}\n")
            lines.append(sep)
        lines.append("   a   b   c   d   e   f   g   h\n")
        checkers = "".join(f"{square_name(s)} " for s in iter_squares(self.checkers()))
        lines.append(f"\nFen: {self.fen()}\nKey: {self.key():016X}\nCheckers: {checkers}")
        return "".join(lines)

    # -------------------------------------------------------- set-up helpers

    def _set_castling_right(self, c: Color, rfrom: int) -> None:
        kfrom = self.square(KING, c)
        cr = castling_for(c, KING_SIDE if kfrom < rfrom else QUEEN_SIDE)
        self.st.castling_rights |= cr
        self._castling_rights_mask[kfrom] |= cr
        self._castling_rights_mask[rfrom] |= cr
        self._castling_rook_square[cr] = rfrom
        king_side = bool(cr & KING_SIDE)
        kto = relative_square(c, SQ_G1 if king_side else SQ_C1)
        rto = relative_square(c, SQ_F1 if king_side else SQ_D1)
        self._castling_path[cr] = ((between_bb(rfrom, rto) | between_bb(kfrom, kto))
                                   & ~(square_bb(kfrom) | square_bb(rfrom)) & MASK64)

    def _set_check_info(self, si: StateInfo) -> None:
        white_blockers, black_pinners = self.slider_blockers(
            self.pieces(BLACK), self.square(KING, WHITE))
        black_blockers, white_pinners = self.slider_blockers(
            self.pieces(WHITE), self.square(KING, BLACK))
        si.blockers_for_king = [white_blockers, black_blockers]
        si.pinners = [white_pinners, black_pinners]

        ksq = self.square(KING, ~self._side_to_move)
        occupied = self.pieces()
        checks = [0] * PIECE_TYPE_NB
        checks[PAWN] = pawn_attacks_bb(~self._side_to_move, ksq)
        checks[KNIGHT] = attacks_bb(KNIGHT, ksq)
        checks[BISHOP] = attacks_bb(BISHOP, ksq, occupied)
        checks[ROOK] = attacks_bb(ROOK, ksq, occupied)
        checks[QUEEN] = checks[BISHOP] | checks[ROOK]
        si.check_squares = checks

    def _set_state(self, si: StateInfo) -> None:
        """Compute keys, material and check data from scratch."""
        si.key = 0
        si.material_key = 0
        si.pawn_key = NO_PAWNS
        si.non_pawn_material = [0, 0]
        stm = self._side_to_move
        si.checkers_bb = self.attackers_to(self.square(KING, stm)) & self.pieces(~stm)

        self._set_check_info(si)

        for s in iter_squares(self.pieces()):
            pc = self._board[s]
            si.key ^= PSQ[pc][s]
            if type_of(pc) == PAWN:
                si.pawn_key ^= PSQ[pc][s]
            elif type_of(pc) != KING:
                si.non_pawn_material[color_of(pc)] += PIECE_VALUE[MG][pc]

        if si.ep_square != SQ_NONE:
            si.key ^= ENPASSANT[file_of(si.ep_square)]
        if stm == BLACK:
            si.key ^= SIDE
        si.key ^= CASTLING[si.castling_rights]

        for pc in PIECES:
            for cnt in range(self._piece_count[pc]):
                si.material_key ^= PSQ[pc][cnt]

    def _move_piece(self, origin: int, target: int) -> None:
        pc = self._board[origin]
        both = square_bb(origin) | square_bb(target)
        self._by_type[ALL_PIECES] ^= both
        self._by_type[type_of(pc)] ^= both
        self._by_color[color_of(pc)] ^= both
        self._board[origin] = NO_PIECE
        self._board[target] = pc
        self._psq += _psq_of(pc, target) - _psq_of(pc, origin)

    def _adjust_key50(self, k: int, after_move: bool) -> int:
        limit = 14 - int(after_move)
        if self.st.rule50 < limit:
            return k
        return k ^ make_key((self.st.rule50 - limit) // 8)

    # ------------------------------------------------------ representation

    def pieces(self, *args) -> int:
        """Bitboard of pieces: ``()``, ``(pt, ...)`` or ``(colour, pt, ...)``.

        A first argument that is a ``Color`` selects a side; the rest are
        piece types whose squares are joined.
        """
        if not args:
            return self._by_type[ALL_PIECES]
        if isinstance(args[0], Color):
            side = self._by_color[args[0]]
            types = args[1:]
            if not types:
                return side
        else:
            side = MASK64
            types = args
        joined = 0
        for pt in types:
            joined |= self._by_type[pt]
        return side & joined

    def piece_on(self, s: int) -> Piece:
        if not is_ok_square(s):
            raise ValueError(f"not a board square: {s}")
        return self._board[s]

    def empty(self, s: int) -> bool:
        return self.piece_on(s) == NO_PIECE

    def ep_square(self) -> int:
        return self.st.ep_square

    def count(self, pt: int, c: Optional[Color] = None) -> int:
        """Number of pieces of type ``pt``; both sides when ``c`` is None."""
        if c is None:
            return self.count(pt, WHITE) + self.count(pt, BLACK)
        return self._piece_count[(c << 3) + pt]

    def square(self, pt: int, c: Color) -> int:
        """Square of the only piece of type ``pt`` and colour ``c``."""
        if self.count(pt, c) != 1:
            raise ValueError(f"expected exactly one piece of type {pt} for colour {c}")
        return lsb(self.pieces(c, pt))

    def is_on_semiopen_file(self, c: Color, s: int) -> bool:
        return not self.pieces(c, PAWN) & file_bb(s)

    # ------------------------------------------------------------- castling

    def castling_rights(self, c: Color) -> CastlingRights:
        return castling_for(c, self.st.castling_rights)

    def can_castle(self, cr: int) -> bool:
        return bool(self.st.castling_rights & cr)

    def castling_impeded(self, cr: int) -> bool:
        if cr not in _SINGLE_RIGHTS:
            raise ValueError(f"not a single castling right: {cr}")
        return bool(self.pieces() & self._castling_path[cr])

    def castling_rook_square(self, cr: int) -> int:
        if cr not in _SINGLE_RIGHTS:
            raise ValueError(f"not a single castling right: {cr}")
        return self._castling_rook_square[cr]

    # ------------------------------------------------------------- checking

    def checkers(self) -> int:
        return self.st.checkers_bb

    def blockers_for_king(self, c: Color) -> int:
        return self.st.blockers_for_king[c]

    def pinners(self, c: Color) -> int:
        return self.st.pinners[c]

    def check_squares(self, pt: int) -> int:
        return self.st.check_squares[pt]

    # -------------------------------------------------------------- attacks

    def attackers_to(self, s: int, occupied: Optional[int] = None) -> int:
        """All pieces of either side attacking ``s`` given the occupancy."""
        if occupied is None:
            occupied = self.pieces()
        return ((pawn_attacks_bb(BLACK, s) & self.pieces(WHITE, PAWN))
                | (pawn_attacks_bb(WHITE, s) & self.pieces(BLACK, PAWN))
                | (attacks_bb(KNIGHT, s) & self.pieces(KNIGHT))
                | (attacks_bb(ROOK, s, occupied) & self.pieces(ROOK, QUEEN))
                | (attacks_bb(BISHOP, s, occupied) & self.pieces(BISHOP, QUEEN))
                | (attacks_bb(KING, s) & self.pieces(KING)))

    def slider_blockers(self, sliders: int, s: int) -> tuple[int, int]:
        """Pieces that alone shield ``s`` from ``sliders``, and the pinners.

        Returns ``(blockers, pinners)``; a pinner is a slider whose blocker
        has the colour of the piece on ``s``.
        """
        blockers = pinners = 0
        snipers = ((attacks_bb(ROOK, s) & self.pieces(QUEEN, ROOK))
                   | (attacks_bb(BISHOP, s) & self.pieces(QUEEN, BISHOP))) & sliders
        occupancy = self.pieces() ^ snipers
        own = self.pieces(color_of(self._board[s]))
        for sniper in iter_squares(snipers):
            b = between_bb(s, sniper) & occupancy
            if b and not more_than_one(b):
                blockers |= b
                if b & own:
                    pinners |= square_bb(sniper)
        return blockers, pinners

    def attacks_by(self, pt: int, c: Color) -> int:
        """Squares attacked by all pieces of type ``pt`` and colour ``c``."""
        if pt == PAWN:
            return pawn_attacks_from_set(c, self.pieces(c, PAWN))
        threats = 0
        occupied = self.pieces()
        for s in iter_squares(self.pieces(c, pt)):
            threats |= attacks_bb(pt, s, occupied)
        return threats

    # ---------------------------------------------------------------- moves

    def moved_piece(self, m: int) -> Piece:
        return self.piece_on(from_sq(m))

    def captured_piece(self) -> int:
        return self.st.captured_piece

    # ------------------------------------------------------- piece specific

    def pawn_passed(self, c: Color, s: int) -> bool:
        return not self.pieces(~c, PAWN) & passed_pawn_span(c, s)

    def opposite_bishops(self) -> bool:
        return (self.count(BISHOP, WHITE) == 1
                and self.count(BISHOP, BLACK) == 1
                and opposite_colors(self.square(BISHOP, WHITE), self.square(BISHOP, BLACK)))

    def pawns_on_same_color_squares(self, c: Color, s: int) -> int:
        squares = DARK_SQUARES if DARK_SQUARES & square_bb(s) else ~DARK_SQUARES & MASK64
        return popcount(self.pieces(c, PAWN) & squares)

    # ----------------------------------------------------------- hash keys

    def key(self) -> int:
        """Position key, varied once the fifty-move counter grows large."""
        return self._adjust_key50(self.st.key, False)

    def material_key(self) -> int:
        return self.st.material_key

    def pawn_key(self) -> int:
        return self.st.pawn_key

    # ------------------------------------------------------ other properties

    def side_to_move(self) -> Color:
        return self._side_to_move

    def game_ply(self) -> int:
        return self._game_ply

    def is_chess960(self) -> bool:
        return self._chess960

    def rule50_count(self) -> int:
        return self.st.rule50

    def psq_score(self) -> int:
        return self._psq

    def psq_eg_stm(self) -> int:
        """Endgame piece-square score from the side to move's view."""
        return (1 if self._side_to_move == WHITE else -1) * eg_value(self._psq)

    def non_pawn_material(self, c: Optional[Color] = None) -> int:
        """Non-pawn material of ``c``, or of both sides when ``c`` is None."""
        if c is None:
            return sum(self.st.non_pawn_material)
        return self.st.non_pawn_material[c]

    # ------------------------------------------------------------ updating

    def put_piece(self, pc: int, s: int) -> None:
        pc = Piece(pc)
        bit = square_bb(s)
        self._board[s] = pc
        self._by_type[type_of(pc)] |= bit
        self._by_type[ALL_PIECES] |= bit
        self._by_color[color_of(pc)] |= bit
        self._piece_count[pc] += 1
        self._piece_count[color_of(pc) << 3] += 1
        self._psq += _psq_of(pc, s)

    def remove_piece(self, s: int) -> None:
        pc = self._board[s]
        if pc == NO_PIECE:
            raise ValueError(f"no piece on {square_name(s)}")
        bit = square_bb(s)
        self._by_type[ALL_PIECES] ^= bit
        self._by_type[type_of(pc)] ^= bit
        self._by_color[color_of(pc)] ^= bit
        self._board[s] = NO_PIECE
        self._piece_count[pc] -= 1
        self._piece_count[color_of(pc) << 3] -= 1
        self._psq -= _psq_of(pc, s)

    # --------------------------------------------------------- consistency

    def pos_is_ok(self) -> bool:
        """Full consistency check of the board and its derived state."""
        stm = self._side_to_move
        if stm not in (WHITE, BLACK):
            return False
        if self.count(KING, WHITE) != 1 or self.count(KING, BLACK) != 1:
            return False
        if self.ep_square() != SQ_NONE and relative_rank_of(stm, self.ep_square()) != RANK_6:
            return False
        if self.attackers_to(self.square(KING, ~stm)) & self.pieces(stm):
            return False

        if (self.pieces(PAWN) & (RANK_1_BB | RANK_8_BB)
                or self._piece_count[Piece.W_PAWN] > 8
                or self._piece_count[Piece.B_PAWN] > 8):
            return False

        white, black = self.pieces(WHITE), self.pieces(BLACK)
        if (white & black or (white | black) != self.pieces()
                or popcount(white) > 16 or popcount(black) > 16):
            return False
        types = range(PAWN, KING + 1)
        if any(p1 != p2 and self._by_type[p1] & self._by_type[p2]
               for p1 in types for p2 in types):
            return False

        fresh = replace(self.st)
        self._set_state(fresh)
        if fresh != self.st:
            return False

        for pc in PIECES:
            n = self._piece_count[pc]
            if (n != popcount(self.pieces(color_of(pc), type_of(pc)))
                    or n != self._board.count(pc)):
                return False

        for c in (WHITE, BLACK):
            for cr in (castling_for(c, KING_SIDE), castling_for(c, QUEEN_SIDE)):
                if not self.can_castle(cr):
                    continue
                rsq = self._castling_rook_square[cr]
                if (rsq == SQ_NONE
                        or self._board[rsq] != make_piece(c, ROOK)
                        or self._castling_rights_mask[rsq] != cr
                        or (self._castling_rights_mask[self.square(KING, c)] & cr) != cr):
                    return False
        return True