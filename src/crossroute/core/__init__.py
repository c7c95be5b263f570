"""Collaborators consumed by providers and trades: HTTP, chain reads/writes, gas prices."""
