class OptimizerError(Exception):
    """Base class for errors raised by the solution optimizer."""


class InvalidMoveError(OptimizerError, ValueError):
    def __init__(self, char: str):
        super().__init__(f"Invalid movement character: {char!r}")
        self.char = char


class LevelSolvedError(OptimizerError, RuntimeError):
    def __init__(self):
        super().__init__("Level has been solved")


class UnreachableSegmentError(OptimizerError, RuntimeError):
    """A segment boundary that was walked during replay has no walkable path."""

    def __init__(self, start, end):
        super().__init__(f"Path not found from {start} to {end}")
        self.start = start
        self.end = end
