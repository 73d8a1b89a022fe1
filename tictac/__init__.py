"""
Tictac - Two-Player Tic-Tac-Toe Session Engine

A deterministic rules engine for 3x3 tic-tac-toe sessions backed by
fixed-size durable records. The package provides:
- Game state and move validation
- Win/tie detection
- A session registry assigning unique game addresses
- Record storage and a REST/CLI command surface
"""

__version__ = "0.1.0"
