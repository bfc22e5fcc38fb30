[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "fishcore"
version = "0.1.0"
description = "Chess position library: bitboards, FEN, Zobrist hashing, move making, static exchange evaluation and repetition detection"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "bitboard", "fen", "zobrist", "chess960", "board-games"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["fishcore*"]

[tool.pytest.ini_options]
addopts = "-ra"
