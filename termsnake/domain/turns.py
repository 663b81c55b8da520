"""
Turn validation: a snake may go anywhere except straight back on itself.
"""

from .constants import OPPOSITES


def opposite(heading: str) -> str:
    """Return the heading pointing the other way."""
    try:
        return OPPOSITES[heading]
    except KeyError:
        raise ValueError(f"Unknown heading: {heading!r}") from None


def is_valid_turn(current: str, proposed: str) -> bool:
    """
    Return False iff proposed is the exact reverse of current.

    Keeping the same heading counts as a valid turn.
    """
    if proposed not in OPPOSITES:
        raise ValueError(f"Unknown heading: {proposed!r}")
    return proposed != opposite(current)
