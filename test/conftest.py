import pytest


@pytest.fixture
def ferris_txt():
    """The FerrisCrawler example document."""
    return (b"User-Agent: FerrisCrawler\n"
            b"Allow: /ocean\n"
            b"Disallow: /rust\n"
            b"Disallow: /forest*.py\n"
            b"Crawl-Delay: 10\n"
            b"User-Agent: *\n"
            b"Disallow: /\n"
            b"Sitemap: https://www.example.com/site.xml")


@pytest.fixture
def hn_txt():
    """Hacker News style robots.txt with query rules and a crawl delay."""
    return b"""User-Agent: *
    Disallow: /x?
    Disallow: /r?
    Disallow: /vote?
    Disallow: /reply?
    Disallow: /submitted?
    Disallow: /submitlink?
    Disallow: /threads?
    Crawl-delay: 30"""


@pytest.fixture
def write_robots(tmp_path):
    """Write robots.txt content to a temporary file and return its path."""
    def _write_robots(content: bytes):
        path = tmp_path / "robots.txt"
        path.write_bytes(content)
        return path
    return _write_robots
