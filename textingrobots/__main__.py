"""Command line entry point: check URLs against a local robots.txt file."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from textingrobots.config import RobotConfig
from textingrobots.exceptions import InvalidRobotsException
from textingrobots.robot import Robot

logger = logging.getLogger("textingrobots")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="textingrobots",
        description="Check URLs against a robots.txt file for a given user agent",
    )
    p.add_argument("robots_file", help="Path to a robots.txt file (never fetched)")
    p.add_argument("agent", help="User agent to evaluate the rules for")
    p.add_argument("urls", nargs="*", help="URLs or paths to check")
    p.add_argument("--rules", action="store_true", help="Print the rules kept for the agent")
    p.add_argument("--benchmark", type=int, default=0, metavar="N",
                   help="Build the robot N times and report the average time")
    p.add_argument("--max-input-bytes", type=int, default=None,
                   help="Truncate the file before parsing")
    p.add_argument("--regex-size-limit", type=int, default=None,
                   help="Compiled size limit for rules ending in '$'")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def _build_config(args) -> RobotConfig:
    """Build RobotConfig from CLI args, falling back to the environment."""
    config = RobotConfig.from_env()
    return RobotConfig(
        regex_size_limit=config.regex_size_limit if args.regex_size_limit is None else args.regex_size_limit,
        max_input_bytes=config.max_input_bytes if args.max_input_bytes is None else args.max_input_bytes,
    )


def _benchmark(agent: str, txt: bytes, config: RobotConfig, rounds: int) -> float:
    start = time.perf_counter()
    for _ in range(rounds):
        Robot(agent, txt, config=config)
    return (time.perf_counter() - start) / rounds


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = _build_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    try:
        txt = Path(args.robots_file).read_bytes()
    except OSError as e:
        logger.error(f"Cannot read {args.robots_file}: {e}")
        return 1

    try:
        robot = Robot(args.agent, txt, config=config)
    except InvalidRobotsException as e:
        logger.error(f"Cannot build robot from {args.robots_file}: {e}")
        return 1

    print(f"agent: {robot.agent}")
    print(f"delay: {robot.delay if robot.delay is not None else '-'}")
    for sitemap in robot.sitemaps:
        print(f"sitemap: {sitemap}")

    if args.rules:
        for pattern, allowed in robot:
            print(f"{'allow' if allowed else 'disallow'}: {pattern}")

    for url in args.urls:
        print(f"{'allowed' if robot.allowed(url) else 'disallowed'}: {url}")

    if args.benchmark > 0:
        elapsed = _benchmark(args.agent, txt, config, args.benchmark)
        print(f"benchmark: {args.benchmark} rounds, {elapsed * 1000:.3f} ms per robot")

    return 0


if __name__ == "__main__":
    sys.exit(main())
