"""
Ten Exorcism - Deterministic puzzle engine with replay verification

Drag a rectangle over a grid of ghosts; if their powers sum to exactly 10
they are exorcised. The engine provides:
- Seed-reproducible board generation
- Selection validation and immutable board updates
- Detection of stuck boards
- Session logging and replay verification of claimed scores
"""

__version__ = "0.1.0"
