from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class LineType(Enum):
    """Kinds of robots.txt lines.

    Attributes:
        USER_AGENT: Opens (or extends) an agent group
        ALLOW: Path pattern the group may fetch
        DISALLOW: Path pattern the group may not fetch
        SITEMAP: Sitemap URL, independent of any group
        CRAWL_DELAY: Seconds between requests
        RAW: Anything else (comments, blank lines, unknown or malformed directives)
    """
    USER_AGENT = 0
    ALLOW = 1
    DISALLOW = 2
    SITEMAP = 3
    CRAWL_DELAY = 4
    RAW = 5


class Line(BaseModel):
    """A single physical line of a robots.txt document.

    Attributes:
        type (LineType): What kind of line this is
        value (bytes): The trimmed directive value, or the whole line for RAW
        delay (Optional[float]): Parsed delay in seconds (CRAWL_DELAY only)
    """
    # @note: The named constructors skip validation, they run once per line of a document
    model_config = ConfigDict(frozen=True)

    type: LineType
    value: bytes = b""
    delay: Optional[float] = None

    @classmethod
    def user_agent(cls, value: bytes) -> "Line":
        return cls.model_construct(type=LineType.USER_AGENT, value=value)

    @classmethod
    def allow(cls, value: bytes) -> "Line":
        return cls.model_construct(type=LineType.ALLOW, value=value)

    @classmethod
    def disallow(cls, value: bytes) -> "Line":
        return cls.model_construct(type=LineType.DISALLOW, value=value)

    @classmethod
    def sitemap(cls, value: bytes) -> "Line":
        return cls.model_construct(type=LineType.SITEMAP, value=value)

    @classmethod
    def crawl_delay(cls, delay: Optional[float]) -> "Line":
        return cls.model_construct(type=LineType.CRAWL_DELAY, delay=delay)

    @classmethod
    def raw(cls, value: bytes) -> "Line":
        return cls.model_construct(type=LineType.RAW, value=value)

    def __repr__(self):
        if self.type == LineType.CRAWL_DELAY:
            return f"<Line {self.type.name} {self.delay}>"
        return f"<Line {self.type.name} {self.value!r}>"
