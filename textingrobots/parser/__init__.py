import re
import logging
from typing import List, Optional, Union
from textingrobots.exceptions import InvalidRobotsException
from .models import Line, LineType

logger = logging.getLogger(__name__)

Content = Union[bytes, bytearray, memoryview, str]

# @note: A line ends on "\n" after any number of "\r", or on a bare run of "\r"
_LINE_ENDING = re.compile(rb"\r*\n|\r+")

# @note: Order matters, the first directive that matches a line wins
_KEYWORDS = (
    (LineType.USER_AGENT, (b"user-agent", b"user agent", b"useragent")),
    (LineType.ALLOW, (b"allow",)),
    (LineType.DISALLOW, (b"disallow", b"dissallow", b"dissalow", b"disalow", b"diasllow", b"disallaw")),
    (LineType.SITEMAP, (b"sitemap", b"site-map", b"site map")),
    (LineType.CRAWL_DELAY, (b"crawl-delay", b"crawl delay", b"crawldelay")),
)


def _directive(keywords) -> "re.Pattern[bytes]":
    # @note: "Key: value", "Key : value" and "Key value" are all accepted
    names = b"|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rb"[ \t]*(?:" + names + rb")(?:[ \t]*:|[ \t]+)([^#]*)", re.IGNORECASE)


_DIRECTIVES = tuple((line_type, _directive(keywords)) for line_type, keywords in _KEYWORDS)

# @note: Every code point with the Unicode White_Space property
_WHITESPACE = "\t\n\x0b\x0c\r \x85\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006" \
              "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000"


def _trim(value: bytes) -> bytes:
    """Trim Unicode whitespace from both ends of a directive value.

    Bytes that are not valid UTF-8 are kept as they are.

    Args:
        value (bytes): The raw directive value

    Returns:
        bytes: The trimmed value
    """
    if value.isascii():
        return value.strip()
    text = value.decode("utf-8", "surrogateescape").strip(_WHITESPACE)
    return text.encode("utf-8", "surrogateescape")


class DirectiveParser:
    """A tolerant, line oriented parser for robots.txt documents.

    Every physical line becomes exactly one Line. Anything that is not a
    well formed directive (comments, blank lines, unknown keys, a crawl delay
    that is not a number) becomes a RAW line instead of an error, so parsing
    never fails on the content of a document.

    Attributes:
        max_input_bytes (Optional[int]): Truncate documents to this many bytes

    Example:
        >>> parser = DirectiveParser()
        >>> parser.parse(b"User-agent: *\\nDisallow: /private/")
        [<Line USER_AGENT b'*'>, <Line DISALLOW b'/private/'>]
    """

    def __init__(self, max_input_bytes: Optional[int] = None):
        self.max_input_bytes = max_input_bytes

    # @context: Public
    def parse(self, content: Content) -> List[Line]:
        """Parse a robots.txt document into its lines.

        Args:
            content (Content): Raw document, bytes are preferred; str is UTF-8 encoded

        Returns:
            List[Line]: One Line per physical line, in document order

        Raises:
            InvalidRobotsException: If content is not bytes-like or str
        """
        data = self._prepare(content)
        if not data:
            return []

        chunks = _LINE_ENDING.split(data)
        # @note: A terminator at the very end does not open another line
        if not chunks[-1]:
            chunks.pop()

        # @note: Lines are immutable, so repeated lines share one parsed Line
        parsed = {}
        lines = []
        for chunk in chunks:
            line = parsed.get(chunk)
            if line is None:
                line = parsed[chunk] = self._parse_line(chunk)
            lines.append(line)

        logger.debug(f"Parsed {len(lines)} lines from {len(data)} bytes")
        return lines

    # @context: Private
    def _prepare(self, content: Content) -> bytes:
        if isinstance(content, str):
            data = content.encode("utf-8", "surrogateescape")
        elif isinstance(content, (bytes, bytearray, memoryview)):
            data = bytes(content)
        else:
            raise InvalidRobotsException(
                f"robots.txt content must be bytes or str, not {type(content).__name__}")

        if self.max_input_bytes is not None and len(data) > self.max_input_bytes:
            logger.debug(f"Truncating robots.txt from {len(data)} to {self.max_input_bytes} bytes")
            data = data[:self.max_input_bytes]

        # @note: Byte order mark, possibly truncated
        for marker in (b"\xef", b"\xbb", b"\xbf"):
            if data.startswith(marker):
                data = data[1:]

        # @note: Stray NULs exist in the wild, treat them as line breaks
        return data.replace(b"\x00", b"\n")

    def _parse_line(self, line: bytes) -> Line:
        """Parse a single line (without its terminator).

        Args:
            line (bytes): A line from the robots.txt file

        Returns:
            Line: The recognized directive, or a RAW line
        """
        stripped = line.lstrip(b" \t")
        if not stripped or stripped.startswith(b"#"):
            return Line.raw(line)

        for line_type, directive in _DIRECTIVES:
            match = directive.match(line)
            if match is None:
                continue
            value = _trim(match.group(1))

            if line_type == LineType.CRAWL_DELAY:
                delay = self._parse_delay(value)
                if delay is None:
                    break
                return Line.crawl_delay(delay)

            if line_type == LineType.DISALLOW and not value:
                # @note: "Disallow:" with no path allows everything
                return Line.allow(b"/")

            return Line.model_construct(type=line_type, value=value)

        return Line.raw(line)

    def _parse_delay(self, value: bytes) -> Optional[float]:
        """Parse a crawl delay value in seconds.

        Args:
            value (bytes): The trimmed directive value

        Returns:
            Optional[float]: The delay, or None if it is not a non-negative number
        """
        try:
            text = value.decode("ascii")
        except UnicodeDecodeError:
            return None

        if not text or "_" in text:
            return None

        try:
            delay = float(text)
        except ValueError:
            logger.debug(f"Ignoring malformed crawl delay: {text!r}")
            return None

        # @note: NaN fails this comparison as well
        if not delay >= 0.0:
            logger.debug(f"Ignoring negative crawl delay: {text!r}")
            return None
        return delay


def parse(content: Content, max_input_bytes: Optional[int] = None) -> List[Line]:
    """Parse a robots.txt document into its lines.

    Args:
        content (Content): Raw document
        max_input_bytes (Optional[int]): Truncate documents to this many bytes

    Returns:
        List[Line]: One Line per physical line, in document order
    """
    return DirectiveParser(max_input_bytes=max_input_bytes).parse(content)


__all__ = ["DirectiveParser", "Line", "LineType", "parse"]
