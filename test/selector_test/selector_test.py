from textingrobots.parser import parse
from textingrobots.parser.models import Line
from textingrobots.selector import AgentSelector, Selection, select


def test_selects_named_agent(ferris_txt):
    """Test that the named agent gets its own group."""
    selection = select(parse(ferris_txt), "FerrisCrawler")

    assert selection.agent == "ferriscrawler"
    assert selection.lines == [
        Line.allow(b"/ocean"),
        Line.disallow(b"/rust"),
        Line.disallow(b"/forest*.py"),
        Line.crawl_delay(10.0),
    ]
    assert selection.delay == 10.0
    assert selection.sitemaps == ["https://www.example.com/site.xml"]


def test_unknown_agent_falls_back_to_wildcard(ferris_txt):
    """Test that agents not named fall back to "*"."""
    selection = select(parse(ferris_txt), "BobBot")

    assert selection.agent == "*"
    assert selection.lines == [Line.disallow(b"/")]
    assert selection.delay is None


def test_agent_is_case_insensitive():
    """Test case-insensitive handling of User-agent values."""
    content = b"User-agent: Bot-Name\nDisallow: /private/"
    assert AgentSelector("BOT-NAME").select(parse(content)).lines == [Line.disallow(b"/private/")]


def test_consecutive_user_agents():
    """Test that consecutive User-agent lines share the following rules."""
    content = b"User-agent: one\nUser-agent: two\nDisallow: /tmp"
    for agent in ("one", "two"):
        assert select(parse(content), agent).lines == [Line.disallow(b"/tmp")]


def test_blank_lines_do_not_split_header():
    """Test that blank lines and comments between User-agent lines keep them in one group."""
    content = b"User-agent: one\n\n# comment\nUser-agent: two\nDisallow: /tmp"
    assert select(parse(content), "one").lines == [Line.disallow(b"/tmp")]


def test_unknown_keys_keep_capturing():
    """Test that an unknown directive does not end the group."""
    content = b"User-agent: one\nNoindex: /y\nDisallow: /x\nUser-agent: two\nDisallow: /z"
    assert select(parse(content), "one").lines == [Line.disallow(b"/x")]


def test_new_header_ends_group():
    """Test that a new User-agent run ends the previous group."""
    content = b"User-agent: one\nDisallow: /a\nUser-agent: two\nDisallow: /b\nUser-agent: one\nDisallow: /c"
    assert select(parse(content), "one").lines == [Line.disallow(b"/a"), Line.disallow(b"/c")]
    assert select(parse(content), "two").lines == [Line.disallow(b"/b")]


def test_unnamed_agent_without_wildcard_group():
    """Test that an agent matching no group gets nothing."""
    content = b"User-agent: one\nDisallow: /a"
    selection = select(parse(content), "three")
    assert selection.agent == "*"
    assert selection.lines == []


def test_document_without_user_agents_applies_to_all():
    """Test that rules with no User-agent line apply to every agent."""
    content = b"Disallow: /path\nAllow: /path/exception\nCrawl-delay: 5.2"
    selection = select(parse(content), "Agent")
    assert selection.lines == [
        Line.disallow(b"/path"),
        Line.allow(b"/path/exception"),
        Line.crawl_delay(5.2),
    ]
    assert selection.delay == 5.2


def test_sitemaps_from_every_group():
    """Test that sitemaps are collected regardless of group, in order and not deduplicated."""
    content = b"""Sitemap: https://example.com/a.xml
User-agent: one
Sitemap: https://example.com/b.xml
User-agent: two
Sitemap: https://example.com/a.xml
Sitemap:
Sitemap: https://example.com/\xff.xml"""

    assert select(parse(content), "zero").sitemaps == [
        "https://example.com/a.xml",
        "https://example.com/b.xml",
        "https://example.com/a.xml",
        "",
    ]


def test_first_captured_delay_wins():
    """Test that the first delay in the agent's groups is used."""
    content = b"User-agent: one\nCrawl-delay: 3\nCrawl-delay: 4\nUser-agent: *\nCrawl-delay: 9"
    assert select(parse(content), "one").delay == 3.0
    assert select(parse(content), "two").delay == 9.0


def test_leading_delay_applies_to_all():
    """Test that a delay before any User-agent line applies to every agent."""
    content = b"Crawl-Delay: 42\nUser-Agent: *\nDisallow: /x"
    assert select(parse(content), "anybot").delay == 42.0


def test_own_delay_beats_leading_delay():
    """Test that an agent's own delay overrides the leading one."""
    content = b"Crawl-Delay: 42\nUser-Agent: bot\nCrawl-delay: 5\nUser-Agent: *\nDisallow: /x"
    assert select(parse(content), "bot").delay == 5.0
    assert select(parse(content), "other").delay == 42.0


def test_last_leading_delay_wins():
    """Test that the last of several leading delays is used."""
    content = b"Crawl-Delay: 1\nCrawl-Delay: 2\nUser-Agent: *\nDisallow: /x"
    assert select(parse(content), "bot").delay == 2.0


def test_delay_of_other_group_is_ignored():
    """Test that a delay in another agent's group does not leak."""
    content = b"User-agent: one\nCrawl-delay: 3\nUser-agent: *\nDisallow: /x"
    assert select(parse(content), "two").delay is None


def test_malformed_delay_is_ignored():
    """Test that a malformed delay leaves the delay unset."""
    content = b"User-agent: *\nCrawl-delay: word"
    assert select(parse(content), "Agent").delay is None


def test_empty_document():
    """Test selecting from an empty document."""
    assert select([], "bot") == Selection(agent="*")
