import re
import re2
import logging
from typing import List, Optional, Tuple
from textingrobots.config import DEFAULT_REGEX_SIZE_LIMIT
from textingrobots.exceptions import RuleCompileException
from .types import MatchType

logger = logging.getLogger(__name__)

_STAR_RUN = re.compile(r"\*{2,}")


def collapse_wildcards(pattern: str) -> str:
    """Replace every run of "*" with a single "*".

    "x***y" and "x*y" match the same paths, but the former costs a naive
    matcher (or a regex engine) far more. Rules with thousands of stars exist.

    Args:
        pattern (str): A rule pattern

    Returns:
        str: The pattern with star runs collapsed
    """
    return _STAR_RUN.sub("*", pattern)


class RuleMatcher:
    """A single compiled Allow/Disallow rule.

    The cheapest representation that can express the pattern is picked at
    construction (see MatchType). All three behave exactly like the regex
    "^" + escape(pattern) with "*" as ".*" and "$" as end of text.

    Attributes:
        pattern (str): The wildcard collapsed pattern
        length (int): Length of the rule as written, used for precedence
        allowed (bool): True for Allow, False for Disallow
        type (MatchType): The representation in use

    Example:
        >>> rule = RuleMatcher("/forest*.py", allowed=False)
        >>> rule.matches("/forest/tree/snake.py")
        True
    """

    def __init__(self, pattern: str, allowed: bool, length: Optional[int] = None,
                 size_limit: int = DEFAULT_REGEX_SIZE_LIMIT):
        """Compile a rule.

        Args:
            pattern (str): The (percent encoded) rule pattern
            allowed (bool): Polarity of the rule
            length (Optional[int]): Length of the rule as written. Defaults to len(pattern)
            size_limit (int): Compiled program ceiling for ANCHORED rules, in bytes

        Raises:
            RuleCompileException: If an ANCHORED rule exceeds size_limit
        """
        self.length: int = len(pattern) if length is None else length
        self.allowed: bool = allowed
        self.pattern: str = collapse_wildcards(pattern)

        self._segments: List[str] = []
        self._regex = None

        if "$" in self.pattern:
            self.type = MatchType.ANCHORED
            self._regex = self._compile_anchored(self.pattern, size_limit)
        elif "*" in self.pattern:
            self.type = MatchType.WILDCARD
            self._segments = self.pattern.split("*")
        else:
            self.type = MatchType.LITERAL

    # @context: Public
    def matches(self, path: str) -> bool:
        """Check whether the rule applies to a normalized path.

        Args:
            path (str): Percent encoded path (with query)

        Returns:
            bool: True if the rule matches
        """
        if self.type == MatchType.LITERAL:
            return path.startswith(self.pattern)
        if self.type == MatchType.WILDCARD:
            return self._scan(path)
        return self._regex.match(path) is not None

    @property
    def sort_key(self) -> Tuple[int, bool]:
        """Precedence of the rule, higher wins: longer first, then Allow over Disallow."""
        return self.length, self.allowed

    # @context: Private
    def _scan(self, path: str) -> bool:
        first, *rest = self._segments
        if not path.startswith(first):
            return False

        cursor = len(first)
        for segment in rest:
            found = path.find(segment, cursor)
            if found < 0:
                return False
            cursor = found + len(segment)
        return True

    @staticmethod
    def _compile_anchored(pattern: str, size_limit: int):
        # @note: "*" means any run of characters and "$" the end of the path, all else is literal
        regex = ".*".join(
            "$".join(re2.escape(piece) for piece in segment.split("$"))
            for segment in pattern.split("*")
        )

        options = re2.Options()
        # @note: RE2 spends two thirds of max_mem on the compiled program
        options.max_mem = size_limit * 3 // 2
        options.dot_nl = True
        options.never_capture = True
        options.log_errors = False

        try:
            return re2.compile(regex, options)
        except re2.error as e:
            logger.warning(f"Rule exceeds compile limits ({len(pattern)} chars): {e}")
            raise RuleCompileException(pattern, str(e)) from e

    def __repr__(self):
        kind = "Allow" if self.allowed else "Disallow"
        return f"<RuleMatcher {kind} {self.pattern!r} length={self.length} type={self.type.name}>"


def compile_rule(pattern: str, allowed: bool, length: Optional[int] = None,
                 size_limit: int = DEFAULT_REGEX_SIZE_LIMIT) -> RuleMatcher:
    """Compile an Allow/Disallow pattern into a RuleMatcher.

    Raises:
        RuleCompileException: If the pattern cannot be compiled within size_limit
    """
    return RuleMatcher(pattern, allowed, length=length, size_limit=size_limit)


__all__ = ["MatchType", "RuleMatcher", "collapse_wildcards", "compile_rule"]
