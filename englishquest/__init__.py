"""English Quest: game-balance and session-settlement engine."""

__version__ = "0.1.0"
