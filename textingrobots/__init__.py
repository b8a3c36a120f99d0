"""Texting Robots - a tolerant robots.txt parser for crawlers.

Fetching robots.txt (and deciding what an HTTP error means) is left to the
caller, this package only interprets the bytes.
"""

__version__ = "0.3.0"

from textingrobots.config import GOOGLE_MAX_INPUT_BYTES, RobotConfig
from textingrobots.exceptions import InvalidRobotsException, RobotsURLException, RuleCompileException
from textingrobots.robot import Robot
from textingrobots.url import get_robots_url

__all__ = [
    "__version__",
    "GOOGLE_MAX_INPUT_BYTES",
    "InvalidRobotsException",
    "Robot",
    "RobotConfig",
    "RobotsURLException",
    "RuleCompileException",
    "get_robots_url",
]
