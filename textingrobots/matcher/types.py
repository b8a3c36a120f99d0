from enum import Enum


class MatchType(Enum):
    """Representations a compiled rule can take.

    Attributes:
        LITERAL: No wildcards, a plain starts-with check
        WILDCARD: Contains "*" but no "$", matched by scanning segments in order
        ANCHORED: Contains "$", matched by a size bounded RE2 program
    """
    LITERAL = 0
    WILDCARD = 1
    ANCHORED = 2
