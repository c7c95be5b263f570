"""Read-only HTTP quote API.

This layer calculates quotes through the cross-chain orchestrator. It
never connects a wallet, signs, or broadcasts transactions.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
