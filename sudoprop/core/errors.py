"""Exception types raised by the board plumbing and the solving engine."""


class SudokuError(Exception):
    """Base class for all sudoprop errors."""


class ParseError(SudokuError, ValueError):
    """Raised when a textual grid cannot be turned into a board."""


class ContractViolationError(SudokuError, RuntimeError):
    """
    Raised when the engine breaks one of its own preconditions.

    Seeing this means a bug in propagation or search, not bad input.
    """


class SolveTimeoutError(SudokuError):
    """Raised inside a solver when its time budget runs out."""
