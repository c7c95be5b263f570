"""Cross-chain and on-chain swap quoting and execution."""

__version__ = "0.1.0"
