"""deckhand - terminal audio player with pause-aware position tracking."""

__version__ = "0.1.0"
