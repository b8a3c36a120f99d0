import logging
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from textingrobots.parser.models import Line, LineType

logger = logging.getLogger(__name__)

WILDCARD_AGENT = "*"


class Selection(BaseModel):
    """The part of a robots.txt document that applies to one agent.

    Attributes:
        agent (str): The lowercased agent whose group was used ("*" after fallback)
        lines (List[Line]): Captured Allow, Disallow and Crawl-Delay lines, in order
        delay (Optional[float]): Effective crawl delay in seconds
        sitemaps (List[str]): Every sitemap in the document, in order
    """
    model_config = ConfigDict(frozen=True)

    agent: str
    lines: List[Line] = Field(default_factory=list)
    delay: Optional[float] = None
    sitemaps: List[str] = Field(default_factory=list)


class AgentSelector:
    """Picks the lines of a parsed robots.txt that apply to a given agent.

    Consecutive User-agent lines form one group header and the directives
    that follow apply to every agent in it. An agent that is never named
    falls back to the "*" group. A document without any User-agent line
    applies as a whole to every agent.

    Example:
        >>> selector = AgentSelector("FerrisCrawler")
        >>> selection = selector.select(parse(b"User-agent: *\\nDisallow: /"))
        >>> selection.agent
        '*'
    """

    def __init__(self, agent: str):
        # @note: Agents are case insensitive
        self.agent: str = agent.lower()

    # @context: Public
    def select(self, lines: List[Line]) -> Selection:
        """Select the lines, delay and sitemaps relevant to the agent.

        Args:
            lines (List[Line]): Parsed document, in order

        Returns:
            Selection: What applies to the agent
        """
        sitemaps = self._collect_sitemaps(lines)

        # @note: Unknown keys and comments are dropped, they do not end a group
        relevant = [line for line in lines if line.type not in (LineType.SITEMAP, LineType.RAW)]

        agent = self.agent
        if not self._references(relevant, agent):
            logger.debug(f"Agent {agent!r} not named in robots.txt, using {WILDCARD_AGENT!r}")
            agent = WILDCARD_AGENT

        captured = self._capture(relevant, agent)
        delay = self._resolve_delay(captured, relevant)

        return Selection(agent=agent, lines=captured, delay=delay, sitemaps=sitemaps)

    # @context: Private
    @staticmethod
    def _collect_sitemaps(lines: List[Line]) -> List[str]:
        sitemaps = []
        for line in lines:
            if line.type != LineType.SITEMAP:
                continue
            try:
                sitemaps.append(line.value.decode("utf-8"))
            except UnicodeDecodeError:
                logger.debug(f"Skipping sitemap with invalid UTF-8: {line.value!r}")
        return sitemaps

    @staticmethod
    def _names(line: Line, agent: str) -> bool:
        return line.value.lower() == agent.encode("utf-8")

    def _references(self, lines: List[Line], agent: str) -> bool:
        return any(line.type == LineType.USER_AGENT and self._names(line, agent) for line in lines)

    def _capture(self, lines: List[Line], agent: str) -> List[Line]:
        """Walk the document once, keeping the lines inside the agent's groups.

        Args:
            lines (List[Line]): Document without sitemaps and raw lines
            agent (str): The lowercased agent to capture for

        Returns:
            List[Line]: The captured non User-agent lines
        """
        capturing = not any(line.type == LineType.USER_AGENT for line in lines)
        in_header = False
        captured = []

        for line in lines:
            if line.type == LineType.USER_AGENT:
                # @note: A new header run closes whatever group came before it
                if not in_header:
                    capturing = False
                    in_header = True
                if self._names(line, agent):
                    capturing = True
                continue

            in_header = False
            if capturing:
                captured.append(line)

        return captured

    @staticmethod
    def _resolve_delay(captured: List[Line], lines: List[Line]) -> Optional[float]:
        """Resolve the crawl delay for the agent.

        The first delay in the agent's own groups wins. Failing that, a delay
        given before the first User-agent line applies to every agent (the
        last such delay if there are several).

        Args:
            captured (List[Line]): The agent's lines
            lines (List[Line]): The whole (filtered) document

        Returns:
            Optional[float]: Seconds between requests, or None
        """
        for line in captured:
            if line.type == LineType.CRAWL_DELAY and line.delay is not None:
                return line.delay

        delay = None
        for line in lines:
            if line.type == LineType.USER_AGENT:
                break
            if line.type == LineType.CRAWL_DELAY and line.delay is not None:
                delay = line.delay
        return delay


def select(lines: List[Line], agent: str) -> Selection:
    """Select the part of a parsed robots.txt that applies to agent."""
    return AgentSelector(agent).select(lines)
