"""Chess positions on bitboards: FEN, hashing, move making and exchange evaluation."""

__version__ = "0.1.0"