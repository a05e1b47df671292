"""Exceptions raised by turn-skirmish."""


class RosterError(ValueError):
    """Raised when a roster cannot be used to start a combat.

    Covers non-positive max HP, inverted or negative damage ranges, HP outside
    its bounds, an empty roster, and a team with no members.
    """
