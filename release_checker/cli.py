#!/usr/bin/env python3
"""CLI entry point for Release Checker."""

from dataclasses import asdict
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .checker import UpdateChecker, read_installed_version
from .config import CheckerConfig, DEFAULT_OWNER, DEFAULT_REPO
from .models import Channel, ReleaseCandidate, UpdateDecision


# ANSI color codes for terminal output
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-TTY output)."""
        cls.HEADER = ''
        cls.BLUE = ''
        cls.CYAN = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.RED = ''
        cls.BOLD = ''
        cls.UNDERLINE = ''
        cls.END = ''


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, 'isatty'):
        return False
    if not sys.stdout.isatty():
        return False
    return True


def print_banner():
    """Print a styled banner."""
    c = Colors
    print(f"""
{c.CYAN}{c.BOLD}╔═══════════════════════════════════════════════════════════╗
║              Release Checker v{__version__:<28}║
║      Check a release feed for a newer version to install  ║
╚═══════════════════════════════════════════════════════════╝{c.END}
""")


def print_success(message: str):
    """Print a success message."""
    print(f"{Colors.GREEN}✓ {message}{Colors.END}")


def print_warning(message: str):
    """Print a warning message."""
    print(f"{Colors.YELLOW}⚠ {message}{Colors.END}")


def print_error(message: str):
    """Print an error message."""
    print(f"{Colors.RED}✗ {message}{Colors.END}", file=sys.stderr)


def print_info(message: str):
    """Print an info message."""
    print(f"{Colors.CYAN}ℹ {message}{Colors.END}")


def print_releases(releases: List[ReleaseCandidate], owner: str, repo: str):
    """Print the release feed in the order it was published."""
    print(f"\n{Colors.BOLD}{owner}/{repo} releases ({len(releases)} total):{Colors.END}\n")

    if not releases:
        print(f"  {Colors.YELLOW}No releases found{Colors.END}")
        return

    for release in releases:
        marker = f" {Colors.YELLOW}(pre-release){Colors.END}" if release.is_prerelease else ""
        print(f"  {release.tag:<20}{marker}")
        if release.url:
            print(f"    {Colors.CYAN}{release.url}{Colors.END}")
    print()


def print_decision(decision: UpdateDecision):
    """Print the outcome of an update check."""
    print(f"  {Colors.BOLD}Channel:{Colors.END}         {decision.channel.label}")
    print(f"  {Colors.BOLD}Current version:{Colors.END} {decision.local_version}")
    if decision.available:
        print(f"  {Colors.BOLD}New version:{Colors.END}     {decision.chosen_tag}")
        print()
        print_success(f"Update available: {decision.chosen_tag}")
        if decision.chosen_url:
            print_info(f"Release page: {decision.chosen_url}")
    else:
        print()
        print_success("You are running the latest version")


class ColoredHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that adds color to help output."""

    def __init__(self, prog, indent_increment=2, max_help_position=30, width=None):
        super().__init__(prog, indent_increment, max_help_position, width)

    def _format_action_invocation(self, action):
        if not action.option_strings:
            default = self._get_default_metavar_for_positional(action)
            metavar, = self._metavar_formatter(action, default)(1)
            return metavar
        return f"{Colors.GREEN}{', '.join(action.option_strings)}{Colors.END}"

    def _format_usage(self, usage, actions, groups, prefix):
        if prefix is None:
            prefix = f'{Colors.BOLD}Usage: {Colors.END}'
        return super()._format_usage(usage, actions, groups, prefix)


def create_parser() -> argparse.ArgumentParser:
    formatter_class = ColoredHelpFormatter if supports_color() else argparse.RawDescriptionHelpFormatter

    def heading(text: str) -> str:
        return f'{Colors.BOLD}{text}{Colors.END}'

    parser = argparse.ArgumentParser(
        prog="release-checker",
        description=heading("Check a GitHub release feed for a newer version"),
        formatter_class=formatter_class,
        epilog=f"""
{heading('Examples:')}

  {Colors.CYAN}# Is there a stable release newer than 1.0.0?{Colors.END}
  %(prog)s --current 1.0.0

  {Colors.CYAN}# Include pre-releases{Colors.END}
  %(prog)s --current v1.0.0 --channel beta

  {Colors.CYAN}# Read the local version from an installed package{Colors.END}
  %(prog)s --package httpx --owner encode --repo httpx

  {Colors.CYAN}# List the release feed{Colors.END}
  %(prog)s --list-releases

{heading('Channels:')}
  stable: the first release not marked as a pre-release
  beta:   the first release in the feed, pre-release or not
""",
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    version_group = parser.add_argument_group(heading('Local Version'))
    version_group.add_argument(
        "--current", "-c",
        dest="current_version",
        metavar="VERSION",
        help="Installed version to compare against",
    )
    version_group.add_argument(
        "--package",
        metavar="NAME",
        help="Read the installed version of this distribution instead",
    )

    feed_group = parser.add_argument_group(heading('Release Feed'))
    feed_group.add_argument(
        "--owner",
        default=None,
        help=f"Repository owner (default: $RELEASE_CHECKER_OWNER or {DEFAULT_OWNER})",
    )
    feed_group.add_argument(
        "--repo",
        default=None,
        help=f"Repository name (default: $RELEASE_CHECKER_REPO or {DEFAULT_REPO})",
    )
    feed_group.add_argument(
        "--channel",
        choices=[c.name.lower() for c in Channel],
        default="stable",
        help="Release channel (default: stable)",
    )
    feed_group.add_argument(
        "--token",
        default=None,
        help="GitHub API token (default: $GITHUB_TOKEN)",
    )
    feed_group.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: 30)",
    )
    feed_group.add_argument(
        "--list-releases",
        action="store_true",
        help="List the release feed and exit",
    )

    other_group = parser.add_argument_group(heading('Other Options'))
    other_group.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the result as JSON",
    )
    other_group.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    other_group.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output",
    )
    other_group.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    other_group.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress spinner",
    )

    perf_group = parser.add_argument_group(heading('Performance'))
    perf_group.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Use async HTTP fetching",
    )

    return parser


async def _run_async(checker, operation, *args):
    """Run one checker operation and close the checker in the same event loop."""
    try:
        return await operation(*args)
    finally:
        await checker.close()


def resolve_local_version(args) -> Optional[str]:
    """Pick the local version from --current or an installed --package."""
    if args.current_version:
        return args.current_version
    if args.package:
        return read_installed_version(args.package)
    return None


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv

    # Pre-parse to check for --no-color before creating parser
    if '--no-color' in argv or not supports_color():
        Colors.disable()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color or args.as_json:
        Colors.disable()

    # Configure logging
    if args.quiet or args.as_json:
        log_level = logging.WARNING
    elif args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        config = CheckerConfig.from_env(
            owner=args.owner,
            repo=args.repo,
            token=args.token,
            timeout=args.timeout,
        )
        channel = Channel.coerce(args.channel)
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        sys.exit(1)

    local_version = None
    if not args.list_releases:
        if not args.current_version and not args.package:
            print_error("--current or --package is required to check for updates")
            print_info("Use --help for usage examples")
            sys.exit(1)
        local_version = resolve_local_version(args)
        if local_version is None:
            print_error(f"Package is not installed: {args.package}")
            sys.exit(1)

    if not args.quiet and not args.as_json:
        print_banner()

    use_progress = (
        not args.quiet
        and not args.no_progress
        and not args.as_json
        and supports_color()
    )
    use_async = args.use_async

    if use_async:
        if use_progress:
            from .async_checker import AsyncUpdateCheckerWithProgress
            checker = AsyncUpdateCheckerWithProgress(config)
        else:
            from .async_checker import AsyncUpdateChecker
            checker = AsyncUpdateChecker(config)
    elif use_progress:
        from .checker import UpdateCheckerWithProgress
        checker = UpdateCheckerWithProgress(config)
    else:
        checker = UpdateChecker(config)

    try:
        # List releases mode
        if args.list_releases:
            if use_async:
                releases = asyncio.run(_run_async(checker, checker.list_releases))
            else:
                releases = checker.list_releases()

            if args.as_json:
                print(json.dumps([asdict(r) for r in releases], indent=2))
            else:
                print_releases(releases, config.owner, config.repo)
            return

        if use_async:
            decision = asyncio.run(_run_async(checker, checker.check, local_version, channel))
        else:
            decision = checker.check(local_version, channel)

        if args.as_json:
            print(json.dumps(decision.to_dict(), indent=2))
        elif args.quiet:
            if decision.available:
                print(decision.chosen_tag)
        else:
            print_decision(decision)

    except ValueError as e:
        print_error(f"Invalid input: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print()
        print_warning("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)
    finally:
        # async checkers close inside their own event loop
        if not use_async:
            checker.close()


if __name__ == "__main__":
    main()
