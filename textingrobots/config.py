import os
from typing import Optional

# @note: Google stops reading robots.txt after 500 KiB
GOOGLE_MAX_INPUT_BYTES = 500 * 1024

# @note: Raised from 10KB to 42KB after real domains shipped complex rules
DEFAULT_REGEX_SIZE_LIMIT = 42 * 1024


class RobotConfig:
    """Limits applied while building a Robot from a robots.txt document.

    Both limits exist to keep adversarial documents from consuming unbounded
    memory or time. They are checked once, at construction.

    Attributes:
        regex_size_limit (int): Maximum compiled program size in bytes for rules
            that need the anchored ("$") matcher
        max_input_bytes (Optional[int]): If set, the document is truncated to this
            many bytes before parsing

    Example:
        config = RobotConfig(
            regex_size_limit=64 * 1024,
            max_input_bytes=GOOGLE_MAX_INPUT_BYTES
        )
    """

    def __init__(self, regex_size_limit: int = DEFAULT_REGEX_SIZE_LIMIT, max_input_bytes: Optional[int] = None):
        if not isinstance(regex_size_limit, int) or isinstance(regex_size_limit, bool) or regex_size_limit <= 0:
            raise ValueError("Regex size limit must be a positive integer")
        if max_input_bytes is not None and (
                not isinstance(max_input_bytes, int) or isinstance(max_input_bytes, bool) or max_input_bytes <= 0):
            raise ValueError("Max input bytes must be a positive integer or None")

        self.regex_size_limit: int = regex_size_limit
        self.max_input_bytes: Optional[int] = max_input_bytes

    @classmethod
    def from_env(cls) -> "RobotConfig":
        """Build a config from ROBOTS_REGEX_SIZE_LIMIT and ROBOTS_MAX_INPUT_BYTES.

        Returns:
            RobotConfig: Config using the environment overrides where present

        Raises:
            ValueError: If an override is not a positive integer
        """
        regex_size_limit = cls._env_int("ROBOTS_REGEX_SIZE_LIMIT")
        return cls(
            regex_size_limit=DEFAULT_REGEX_SIZE_LIMIT if regex_size_limit is None else regex_size_limit,
            max_input_bytes=cls._env_int("ROBOTS_MAX_INPUT_BYTES")
        )

    @staticmethod
    def _env_int(name: str) -> Optional[int]:
        value = os.getenv(name)
        if not value:
            return None
        try:
            return int(value)
        except ValueError as e:
            raise ValueError(f"{name} must be a positive integer, got {value!r}") from e

    def __repr__(self):
        return f"<RobotConfig regex_size_limit={self.regex_size_limit} max_input_bytes={self.max_input_bytes}>"
