# fishcore

A chess position library built on 64-bit bitboards held in plain Python
integers. It has no dependencies outside the standard library.

## Modules

- `fishcore.types` – colours (`Color`, with `~` for the opponent), piece
  types, pieces, `CastlingRights`, `MoveType`, `Bound`, value and depth
  constants, the 16-bit move encoding (`make_move`, `make`, `from_sq`,
  `to_sq`, `move_type`, `promotion_type`), packed middlegame/endgame scores
  (`make_score`, `mg_value`, `eg_value`, `score_div`), square helpers and
  `square_name`.
- `fishcore.bitboards` – `popcount`, `lsb`, `iter_squares`, `more_than_one`,
  file and rank masks, pawn attacks (`pawn_attacks_bb`,
  `pawn_attacks_from_set`), piece attacks with occupancy (`attacks_bb`),
  `between_bb`, `aligned`, `opposite_colors`, `passed_pawn_span`.
- `fishcore.psqt` – piece-square tables: `psq_score(piece, square)` and
  `build_psq_table()`.
- `fishcore.zobrist` – the Zobrist keys (`PSQ`, `ENPASSANT`, `CASTLING`,
  `SIDE`, `NO_PAWNS`) from a fixed-seed xorshift generator (`Prng`), and the
  cuckoo tables of reversible moves (`cuckoo_lookup`, `cuckoo_count`, `h1`,
  `h2`).
- `fishcore.search_types` – plain records for search bookkeeping: `Stack`,
  `RootMove` (compares equal to its first move, sorts best score first,
  `sort_key()`), and `LimitsType` (`use_time_management()`).
- `fishcore.board` – `Board` and `StateInfo`: reading and writing FEN
  (standard, Shredder-FEN and X-FEN castling for Chess960), setting up
  endgames from codes such as `"KBPKN"` (`set_code`), piece and attack
  queries, pins and checkers, hash keys, material and piece-square score,
  an ASCII diagram via `str(board)`, and a consistency check `pos_is_ok()`.
- `fishcore.position` – `Position`, a `Board` that judges and makes moves:
  `legal`, `capture`, `gives_check`, `do_move`, `undo_move`, `do_null_move`,
  `undo_null_move`, `key_after`, `see_ge` (static exchange evaluation),
  `has_repeated`, `has_game_cycle` and `flip` (swap colours).

Squares are numbered 0 (a1) to 63 (h8); bit `s` of a bitboard stands for
square `s`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

```python
from fishcore.position import Position
from fishcore.types import make_move, SQ_E2, SQ_E4

pos = Position()   # starts from the initial position
move = make_move(SQ_E2, SQ_E4)

if pos.legal(move):
    pos.do_move(move, pos.gives_check(move))

print(pos.fen())   # rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1
print(hex(pos.key()))
pos.undo_move(move)
```

`do_move` computes whether the move gives check when that argument is left
out. Castling is encoded as the king capturing its own rook, e.g.
`make(CASTLING, SQ_E1, SQ_H1)`; promotions as
`make(PROMOTION, origin, target, QUEEN)`.

Exchanges can be weighed with static exchange evaluation:

```python
pos.see_ge(move, 0)   # True if the exchange on the target square is not losing
```

A Chess960 position is set with `pos.set(fen, True)`; its FEN output then
uses rook-file letters for castling rights.

## What it does not do

There is no move generator: `legal` expects a pseudo-legal move and
`do_move` expects a legal one, so the caller supplies the moves. There is
also no evaluation, no search, no transposition table, no endgame
tablebase probing and no command-line program or engine protocol; the
records in `fishcore.search_types` only hold data.