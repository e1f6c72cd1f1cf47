"""Injection enums."""

from enum import Enum, auto


class SearchScope(Enum):
    """Where candidates for a member are searched for."""

    LOCAL = auto()
    ANCESTORS = auto()
    DESCENDANTS = auto()
    GLOBAL = auto()


class Disambiguation(Enum):
    """Which structurally compatible candidates qualify."""

    NONE = auto()
    BY_EXPLICIT_KEY = auto()
    BY_NAME = auto()
