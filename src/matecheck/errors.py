"""Exception taxonomy shared by the engine and its protocol adapters."""

from __future__ import annotations


class MatecheckError(Exception):
    """Base class for all engine errors."""


class InvalidMoveTextError(MatecheckError, ValueError):
    """Move or square text could not be parsed (wrong shape or off-board)."""


class InvalidBoardError(MatecheckError, ValueError):
    """A board diagram or side-to-move value is malformed."""


class IllegalMoveError(MatecheckError, ValueError):
    """The requested move is not among the legal moves of the position."""


class NoMoveAvailableError(MatecheckError):
    """Move selection was requested for a side with no legal moves."""


class ConfigError(MatecheckError, ValueError):
    """A configuration value could not be interpreted."""
