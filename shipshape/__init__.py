"""Simulation core for a space-colony supply-chain game: planets, structures, ships, levels and the side-panel model."""

__version__ = "0.1.0"