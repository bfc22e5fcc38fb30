"""Making and unmaking moves, legality, checks, exchanges and repetitions."""

from __future__ import annotations

from typing import Optional

from .bitboards import (
    RANK_1_BB,
    RANK_8_BB,
    aligned,
    attacks_bb,
    between_bb,
    pawn_attacks_bb,
    square_bb,
)
from .board import Board, StateInfo
from .types import (
    BISHOP,
    BISHOP_VALUE_MG,
    CASTLING,
    EAST,
    EN_PASSANT,
    KING,
    KNIGHT,
    KNIGHT_VALUE_MG,
    MG,
    NO_PIECE,
    NORMAL,
    PAWN,
    PAWN_VALUE_MG,
    PIECE_VALUE,
    PROMOTION,
    QUEEN,
    QUEEN_VALUE_MG,
    ROOK,
    ROOK_VALUE_MG,
    SQ_C1,
    SQ_D1,
    SQ_F1,
    SQ_G1,
    SQ_NONE,
    VALUE_ZERO,
    WEST,
    color_of,
    file_of,
    from_sq,
    make_piece,
    move_type,
    pawn_push,
    promotion_type,
    relative_square,
    to_sq,
    type_of,
)
from .zobrist import CASTLING as CASTLING_KEYS
from .zobrist import CUCKOO_KEYS, CUCKOO_MOVES, ENPASSANT, PSQ, SIDE, h1, h2


def _least_bb(b: int) -> int:
    return b & -b


class Position(Board):
    """A board that can make and take back moves and judge them."""

    # ------------------------------------------------------------ legality

    def legal(self, m: int) -> bool:
        """Whether a pseudo-legal move leaves the mover's king safe."""
        us = self._side_to_move
        origin, to = from_sq(m), to_sq(m)
        kind = move_type(m)

        # En passant is rare and tricky: test the king after the capture.
        if kind == EN_PASSANT:
            ksq = self.square(KING, us)
            capsq = to - pawn_push(us)
            occupied = (self.pieces() ^ square_bb(origin) ^ square_bb(capsq)) | square_bb(to)
            return (not attacks_bb(ROOK, ksq, occupied) & self.pieces(~us, QUEEN, ROOK)
                    and not attacks_bb(BISHOP, ksq, occupied) & self.pieces(~us, QUEEN, BISHOP))

        # The castling path is checked for enemy attacks only now.
        if kind == CASTLING:
            to = relative_square(us, SQ_G1 if to > origin else SQ_C1)
            step = WEST if to > origin else EAST
            enemies = self.pieces(~us)
            if any(self.attackers_to(s) & enemies for s in range(to, origin, step)):
                return False
            # In Chess960 the castling rook may itself be shielding the king.
            return not self._chess960 or not self.blockers_for_king(us) & square_bb(to_sq(m))

        if type_of(self.piece_on(origin)) == KING:
            return not (self.attackers_to(to, self.pieces() ^ square_bb(origin))
                        & self.pieces(~us))

        return (not self.blockers_for_king(us) & square_bb(origin)
                or aligned(origin, to, self.square(KING, us)))

    def capture(self, m: int) -> bool:
        """True for captures, en passant included and castling excluded."""
        kind = move_type(m)
        return (not self.empty(to_sq(m)) and kind != CASTLING) or kind == EN_PASSANT

    def gives_check(self, m: int) -> bool:
        """Whether a pseudo-legal move checks the opponent's king."""
        stm = self._side_to_move
        origin, to = from_sq(m), to_sq(m)
        ksq = self.square(KING, ~stm)

        if self.check_squares(type_of(self.piece_on(origin))) & square_bb(to):
            return True

        if (self.blockers_for_king(~stm) & square_bb(origin)
                and not aligned(origin, to, ksq)):
            return True

        kind = move_type(m)
        if kind == NORMAL:
            return False
        if kind == PROMOTION:
            return bool(attacks_bb(promotion_type(m), to, self.pieces() ^ square_bb(origin))
                        & square_bb(ksq))
        if kind == EN_PASSANT:
            # Only a discovered check through the captured pawn is left.
            capsq = (from_sq(m) & ~7) | file_of(to)
            b = (self.pieces() ^ square_bb(origin) ^ square_bb(capsq)) | square_bb(to)
            return bool((attacks_bb(ROOK, ksq, b) & self.pieces(stm, QUEEN, ROOK))
                        | (attacks_bb(BISHOP, ksq, b) & self.pieces(stm, QUEEN, BISHOP)))
        # Castling is encoded as "king captures rook"
        rto = relative_square(stm, SQ_F1 if to > origin else SQ_D1)
        kbit = square_bb(ksq)
        return bool(attacks_bb(ROOK, rto) & kbit
                    and attacks_bb(ROOK, rto, self.pieces() ^ square_bb(origin) ^ square_bb(to))
                    & kbit)

    # --------------------------------------------------------- make/unmake

    def do_move(self, m: int, gives_check: Optional[bool] = None) -> None:
        """Make a legal move, pushing a new state onto the history."""
        if gives_check is None:
            gives_check = self.gives_check(m)

        prev = self.st
        k = prev.key ^ SIDE
        st = StateInfo(
            pawn_key=prev.pawn_key,
            material_key=prev.material_key,
            non_pawn_material=list(prev.non_pawn_material),
            castling_rights=prev.castling_rights,
            rule50=prev.rule50 + 1,
            plies_from_null=prev.plies_from_null + 1,
            ep_square=prev.ep_square,
            previous=prev,
        )
        self.st = st
        self._game_ply += 1

        us = self._side_to_move
        them = ~us
        origin, to = from_sq(m), to_sq(m)
        kind = move_type(m)
        pc = self.piece_on(origin)
        captured = make_piece(them, PAWN) if kind == EN_PASSANT else self.piece_on(to)

        if kind == CASTLING:
            rfrom, rto, to = self._do_castling(us, origin, to, True)
            k ^= PSQ[captured][rfrom] ^ PSQ[captured][rto]
            captured = NO_PIECE

        if captured:
            capsq = to
            if type_of(captured) == PAWN:
                if kind == EN_PASSANT:
                    capsq -= pawn_push(us)
                st.pawn_key ^= PSQ[captured][capsq]
            else:
                st.non_pawn_material[them] -= PIECE_VALUE[MG][captured]

            self.remove_piece(capsq)
            k ^= PSQ[captured][capsq]
            st.material_key ^= PSQ[captured][self._piece_count[captured]]
            st.rule50 = 0

        k ^= PSQ[pc][origin] ^ PSQ[pc][to]

        if st.ep_square != SQ_NONE:
            k ^= ENPASSANT[file_of(st.ep_square)]
            st.ep_square = SQ_NONE

        touched = self._castling_rights_mask[origin] | self._castling_rights_mask[to]
        if st.castling_rights and touched:
            k ^= CASTLING_KEYS[st.castling_rights]
            st.castling_rights &= ~touched
            k ^= CASTLING_KEYS[st.castling_rights]

        if kind != CASTLING:
            self._move_piece(origin, to)

        if type_of(pc) == PAWN:
            if ((to ^ origin) == 16
                    and pawn_attacks_bb(us, to - pawn_push(us)) & self.pieces(them, PAWN)):
                st.ep_square = to - pawn_push(us)
                k ^= ENPASSANT[file_of(st.ep_square)]
            elif kind == PROMOTION:
                promotion = make_piece(us, promotion_type(m))
                self.remove_piece(to)
                self.put_piece(promotion, to)
                k ^= PSQ[pc][to] ^ PSQ[promotion][to]
                st.pawn_key ^= PSQ[pc][to]
                st.material_key ^= (PSQ[promotion][self._piece_count[promotion] - 1]
                                    ^ PSQ[pc][self._piece_count[pc]])
                st.non_pawn_material[us] += PIECE_VALUE[MG][promotion]

            st.pawn_key ^= PSQ[pc][origin] ^ PSQ[pc][to]
            st.rule50 = 0

        st.captured_piece = captured
        st.key = k
        st.checkers_bb = (self.attackers_to(self.square(KING, them)) & self.pieces(us)
                          if gives_check else 0)

        self._side_to_move = them
        self._set_check_info(st)

        # Ply distance to an earlier occurrence; negative when it is the third.
        st.repetition = 0
        end = min(st.rule50, st.plies_from_null)
        if end >= 4:
            stp = st.previous.previous
            for i in range(4, end + 1, 2):
                stp = stp.previous.previous
                if stp.key == st.key:
                    st.repetition = -i if stp.repetition else i
                    break

    def undo_move(self, m: int) -> None:
        """Take back move ``m``, restoring the previous state exactly."""
        if self.st.previous is None:
            raise ValueError("no move to take back")

        self._side_to_move = ~self._side_to_move
        us = self._side_to_move
        origin, to = from_sq(m), to_sq(m)
        kind = move_type(m)

        if kind == PROMOTION:
            self.remove_piece(to)
            self.put_piece(make_piece(us, PAWN), to)

        if kind == CASTLING:
            self._do_castling(us, origin, to, False)
        else:
            self._move_piece(to, origin)
            captured = self.st.captured_piece
            if captured:
                capsq = to - pawn_push(us) if kind == EN_PASSANT else to
                self.put_piece(captured, capsq)

        self.st = self.st.previous
        self._game_ply -= 1

    def _do_castling(self, us, origin: int, to: int, do: bool) -> tuple[int, int, int]:
        """Move king and rook for castling; returns (rook from, rook to, king to)."""
        king_side = to > origin
        rfrom = to  # castling is encoded as "king captures friendly rook"
        rto = relative_square(us, SQ_F1 if king_side else SQ_D1)
        kto = relative_square(us, SQ_G1 if king_side else SQ_C1)

        # Remove both first: in Chess960 the squares may overlap.
        self.remove_piece(origin if do else kto)
        self.remove_piece(rfrom if do else rto)
        self.put_piece(make_piece(us, KING), kto if do else origin)
        self.put_piece(make_piece(us, ROOK), rto if do else rfrom)
        return rfrom, rto, kto

    def do_null_move(self) -> None:
        """Pass the turn without moving; not allowed while in check."""
        if self.checkers():
            raise ValueError("cannot pass while in check")
        prev = self.st
        st = StateInfo(
            pawn_key=prev.pawn_key,
            material_key=prev.material_key,
            non_pawn_material=list(prev.non_pawn_material),
            castling_rights=prev.castling_rights,
            rule50=prev.rule50,
            plies_from_null=prev.plies_from_null,
            ep_square=prev.ep_square,
            key=prev.key,
            checkers_bb=prev.checkers_bb,
            previous=prev,
            captured_piece=prev.captured_piece,
        )
        self.st = st

        if st.ep_square != SQ_NONE:
            st.key ^= ENPASSANT[file_of(st.ep_square)]
            st.ep_square = SQ_NONE

        st.key ^= SIDE
        st.rule50 += 1
        st.plies_from_null = 0
        self._side_to_move = ~self._side_to_move
        self._set_check_info(st)
        st.repetition = 0

    def undo_null_move(self) -> None:
        """Take back a null move."""
        if self.checkers():
            raise ValueError("the last move was not a null move")
        if self.st.previous is None:
            raise ValueError("no move to take back")
        self.st = self.st.previous
        self._side_to_move = ~self._side_to_move

    # ----------------------------------------------------------- hash keys

    def key_after(self, m: int) -> int:
        """Key after a plain move; castling, en passant and promotion are not handled."""
        origin, to = from_sq(m), to_sq(m)
        pc = self.piece_on(origin)
        captured = self.piece_on(to)
        k = self.st.key ^ SIDE
        if captured:
            k ^= PSQ[captured][to]
        k ^= PSQ[pc][to] ^ PSQ[pc][origin]
        if captured or type_of(pc) == PAWN:
            return k
        return self._adjust_key50(k, True)

    # ---------------------------------------------------- static exchanges

    def see_ge(self, m: int, threshold: int = VALUE_ZERO) -> bool:
        """Whether the static exchange on the move's square scores at least ``threshold``."""
        if move_type(m) != NORMAL:
            return VALUE_ZERO >= threshold

        origin, to = from_sq(m), to_sq(m)

        swap = PIECE_VALUE[MG][self.piece_on(to)] - threshold
        if swap < 0:
            return False

        swap = PIECE_VALUE[MG][self.piece_on(origin)] - swap
        if swap <= 0:
            return True

        occupied = self.pieces() ^ square_bb(origin) ^ square_bb(to)
        stm = self._side_to_move
        attackers = self.attackers_to(to, occupied)
        res = 1

        while True:
            stm = ~stm
            attackers &= occupied

            stm_attackers = attackers & self.pieces(stm)
            if not stm_attackers:
                break

            # Pinned pieces may not join while their pinners are still there.
            if self.pinners(~stm) & occupied:
                stm_attackers &= ~self.blockers_for_king(stm)
                if not stm_attackers:
                    break

            res ^= 1

            bb = stm_attackers & self.pieces(PAWN)
            if bb:
                swap = PAWN_VALUE_MG - swap
                if swap < res:
                    break
                occupied ^= _least_bb(bb)
                attackers |= attacks_bb(BISHOP, to, occupied) & self.pieces(BISHOP, QUEEN)
                continue

            bb = stm_attackers & self.pieces(KNIGHT)
            if bb:
                swap = KNIGHT_VALUE_MG - swap
                if swap < res:
                    break
                occupied ^= _least_bb(bb)
                continue

            bb = stm_attackers & self.pieces(BISHOP)
            if bb:
                swap = BISHOP_VALUE_MG - swap
                if swap < res:
                    break
                occupied ^= _least_bb(bb)
                attackers |= attacks_bb(BISHOP, to, occupied) & self.pieces(BISHOP, QUEEN)
                continue

            bb = stm_attackers & self.pieces(ROOK)
            if bb:
                swap = ROOK_VALUE_MG - swap
                if swap < res:
                    break
                occupied ^= _least_bb(bb)
                attackers |= attacks_bb(ROOK, to, occupied) & self.pieces(ROOK, QUEEN)
                continue

            bb = stm_attackers & self.pieces(QUEEN)
            if bb:
                swap = QUEEN_VALUE_MG - swap
                if swap < res:
                    break
                occupied ^= _least_bb(bb)
                attackers |= ((attacks_bb(BISHOP, to, occupied) & self.pieces(BISHOP, QUEEN))
                              | (attacks_bb(ROOK, to, occupied) & self.pieces(ROOK, QUEEN)))
                continue

            # A king "capture" fails if the opponent still has attackers.
            return bool(res ^ 1 if attackers & ~self.pieces(stm) else res)

        return bool(res)

    # --------------------------------------------------------- repetitions

    def has_repeated(self) -> bool:
        """Whether any position repeated since the last capture or pawn move."""
        stc = self.st
        end = min(self.st.rule50, self.st.plies_from_null)
        while end >= 4:
            end -= 1
            if stc.repetition:
                return True
            stc = stc.previous
        return False

    def has_game_cycle(self, ply: int) -> bool:
        """Whether a move here repeats an earlier position, or one led directly here."""
        end = min(self.st.rule50, self.st.plies_from_null)
        if end < 3:
            return False

        original_key = self.st.key
        stp = self.st.previous

        for i in range(3, end + 1, 2):
            stp = stp.previous.previous
            move_key = original_key ^ stp.key

            j = h1(move_key)
            if CUCKOO_KEYS[j] != move_key:
                j = h2(move_key)
                if CUCKOO_KEYS[j] != move_key:
                    continue

            move = CUCKOO_MOVES[j]
            s1, s2 = from_sq(move), to_sq(move)
            if (between_bb(s1, s2) ^ square_bb(s2)) & self.pieces():
                continue

            if ply > i:
                return True

            # At or before the root, the move must repeat rather than reach here.
            pc = self.piece_on(s2 if self.empty(s1) else s1)
            if pc == NO_PIECE or color_of(pc) != self._side_to_move:
                continue

            if stp.repetition:
                return True
        return False

    # ---------------------------------------------------------------- flip

    def flip(self) -> None:
        """Swap the colours: mirror the board and hand the move to the other side."""
        fields = self.fen().split()
        placement = "/".join(reversed(fields[0].split("/")))
        color = "B" if fields[1] == "w" else "W"
        head = f"{placement} {color} {fields[2]}".swapcase()
        ep = fields[3]
        if ep != "-":
            ep = ep[0] + ("6" if ep[1] == "3" else "3")
        self.set(f"{head} {ep} {fields[4]} {fields[5]}", self._chess960)


__all__ = ["Position", "RANK_1_BB", "RANK_8_BB"]