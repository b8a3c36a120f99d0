class InvalidRobotsException(Exception):
    """Exception raised when a robots.txt document cannot be turned into a Robot."""
    pass


class RuleCompileException(InvalidRobotsException):
    """Exception raised when an Allow/Disallow rule exceeds the compile limits.

    Attributes:
        pattern (str): The encoded rule pattern that failed to compile
    """

    def __init__(self, pattern: str, message: str = ""):
        self.pattern = pattern
        super().__init__(f"Invalid robots.txt rule: {pattern!r} ({message})" if message
                         else f"Invalid robots.txt rule: {pattern!r}")


class RobotsURLException(ValueError):
    """Exception raised when a robots.txt URL cannot be derived from a URL."""
    pass
