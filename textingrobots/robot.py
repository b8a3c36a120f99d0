import logging
from typing import Iterator, List, Optional, Tuple
from textingrobots.config import RobotConfig
from textingrobots.matcher import RuleMatcher, compile_rule
from textingrobots.parser import Content, DirectiveParser
from textingrobots.parser.models import LineType
from textingrobots.selector import AgentSelector
from textingrobots.url import percent_encode, prepare_url

logger = logging.getLogger(__name__)

ROBOTS_PATH = "/robots.txt"


class Robot:
    """The robots.txt rules for one agent, ready to be queried.

    Parses the document, keeps what applies to the agent (falling back to
    "*" when the agent is not named) and compiles its Allow/Disallow rules.
    A Robot never changes after construction, so it can be shared freely
    between threads.

    Attributes:
        agent (str): The lowercased agent whose group was used
        delay (Optional[float]): Seconds to wait between requests, if specified
        sitemaps (List[str]): Every sitemap in the document, for any agent

    Example:
        >>> robot = Robot("FerrisCrawler", b"User-agent: *\\nDisallow: /rust\\nCrawl-delay: 10")
        >>> robot.allowed("https://www.rust-lang.org/ocean")
        True
        >>> robot.allowed("/rust")
        False
        >>> robot.delay
        10.0
    """

    def __init__(self, agent: str, txt: Content, config: Optional[RobotConfig] = None):
        """Build the rules for an agent from a robots.txt document.

        Args:
            agent (str): Name of the crawler, compared case insensitively
            txt (Content): The robots.txt document, as fetched
            config (Optional[RobotConfig]): Limits to apply. Defaults to RobotConfig()

        Raises:
            InvalidRobotsException: If txt is not bytes or str
            RuleCompileException: If a rule cannot be compiled within the configured limits
        """
        self.config = config or RobotConfig()

        lines = DirectiveParser(max_input_bytes=self.config.max_input_bytes).parse(txt)
        selection = AgentSelector(agent).select(lines)

        self.agent: str = selection.agent
        self.delay: Optional[float] = selection.delay
        self.sitemaps: List[str] = selection.sitemaps
        self._rules: Tuple[RuleMatcher, ...] = tuple(self._compile(selection.lines))

        logger.debug(
            f"Robot for {agent!r} ({self.agent!r}): {len(self._rules)} rules, "
            f"delay={self.delay}, {len(self.sitemaps)} sitemaps")

    # @context: Public
    def allowed(self, url: str) -> bool:
        """Check if the agent may fetch a URL.

        Among the rules matching the URL the longest one decides, with Allow
        winning a tie. No matching rule means the URL is allowed, and
        /robots.txt itself is always allowed.

        Args:
            url (str): Absolute URL or path (with optional query)

        Returns:
            bool: True if the URL may be fetched

        Example:
            >>> robot = Robot("Ferris", b"Disallow: /secret")
            >>> robot.allowed("https://example.com/secret")
            False
        """
        path = prepare_url(url)
        if path == ROBOTS_PATH:
            return True

        matches = [rule for rule in self._rules if rule.matches(path)]
        if not matches:
            return True

        matches.sort(key=lambda rule: rule.sort_key, reverse=True)
        return matches[0].allowed

    # @context: Private
    def _compile(self, lines) -> Iterator[RuleMatcher]:
        for line in lines:
            if line.type not in (LineType.ALLOW, LineType.DISALLOW):
                continue

            try:
                original = line.value.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug(f"Skipping rule with invalid UTF-8: {line.value!r}")
                continue

            yield compile_rule(
                percent_encode(original),
                allowed=line.type == LineType.ALLOW,
                length=len(original),
                size_limit=self.config.regex_size_limit
            )

    def __iter__(self) -> Iterator[Tuple[str, bool]]:
        """Iterate over the (pattern, allowed) rules kept for the agent, in document order."""
        return ((rule.pattern, rule.allowed) for rule in self._rules)

    def __repr__(self):
        return f"<Robot agent={self.agent!r} rules={len(self._rules)} delay={self.delay} sitemaps={self.sitemaps}>"
