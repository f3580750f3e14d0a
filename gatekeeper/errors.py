"""Domain errors raised by the game services.

Routes translate these into HTTP responses; see gatekeeper.routes.
"""


class NotFoundError(LookupError):
    """A player, session, traveler, structure or inventory record is missing."""


class DecisionConflict(RuntimeError):
    """A decision was submitted for a traveler that is already complete."""


class InvalidAction(ValueError):
    """The request is well-formed but not allowed in the current game state."""


class DayNotComplete(RuntimeError):
    """Day advance attempted before every traveler of the day was completed."""

    def __init__(self, completed: int, required: int) -> None:
        super().__init__(f"Only {completed} of {required} travelers completed")
        self.completed = completed
        self.required = required


class GeneratorError(RuntimeError):
    """Raised when the traveler generator cannot be reached or returns bad data."""


class RunComplete(RuntimeError):
    """Day advance attempted after the last day of the run was finished."""

    def __init__(self, day: int) -> None:
        super().__init__(f"The watch ended after day {day}")
        self.day = day
