"""
Kniffel - Engine Errors

Every rule violation surfaces as one of these exceptions. User-facing
errors also subclass ValueError so callers that only know the builtin
hierarchy can still catch them.
"""


class KniffelError(Exception):
    """Base class for all errors raised by the Kniffel packages."""


class InvalidPlayerList(KniffelError, ValueError):
    """The roster supplied at game creation is empty or malformed."""


class InvalidDiceSelection(KniffelError, ValueError):
    """A keep request does not fit the current hand."""


class CategoryAlreadyUsed(KniffelError, ValueError):
    """The current player already booked this category."""


class UnknownCategory(KniffelError, ValueError):
    """A category tag could not be parsed."""


class InvalidGameRecord(KniffelError, ValueError):
    """A stored game representation is malformed."""


class InvalidPhase(KniffelError, RuntimeError):
    """The operation is not allowed in the game's current phase."""


class PlayerNotFound(KniffelError, LookupError):
    """No player with the given name is part of the game."""


class GameNotFound(KniffelError, LookupError):
    """No stored game exists for the given id."""
