#!/usr/bin/env python3
"""Command line entry point for commit-review.

Usage:
    commit-review                 # review staged changes (pre-commit hook)
    commit-review review --no-strict --show-normal
    commit-review install-hook
"""

import argparse
import asyncio
import logging
import os
import sys

import structlog

from commit_review.config import ReviewConfig
from commit_review.git_diff import StagedDiffReader
from commit_review.hook import install_hook
from commit_review.report import exit_code, render_report
from commit_review.review.errors import ConfigurationError, GitError
from commit_review.review.reviewer import CodeReviewer

logger = structlog.get_logger(__name__)


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolved per logger so a replaced sys.stderr is picked up
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Log to stderr so the report on stdout stays readable."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        logger_factory=_stderr_logger,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commit-review",
        description="Review staged changes with a language model before committing.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--repo", default=None, help="Repository path (default: cwd)")

    subparsers = parser.add_subparsers(dest="command")

    review = subparsers.add_parser("review", help="Review staged changes (default)")
    strict = review.add_mutually_exclusive_group()
    strict.add_argument("--strict", dest="strict", action="store_true", default=None,
                        help="Fail when any chunk could not be reviewed")
    strict.add_argument("--no-strict", dest="strict", action="store_false",
                        help="Tolerate backend call failures")
    review.add_argument("--show-normal", action="store_true", default=None,
                        help="List medium and low severity issues too")

    subparsers.add_parser("install-hook", help="Install the git pre-commit hook")
    return parser


async def run_review(args: argparse.Namespace) -> int:
    """Review the staged diff and return the process exit code."""
    reader = StagedDiffReader(args.repo)
    root = await reader.repo_root()

    config = ReviewConfig.load(root)
    if getattr(args, "strict", None) is not None:
        config.strict = args.strict
    if getattr(args, "show_normal", None):
        config.show_normal = True

    extensions = config.file_extensions
    staged = await reader.get_staged_files()
    reviewable = [f for f in staged if os.path.splitext(f)[1].lower() in extensions]
    if not reviewable:
        print(f"No changes found in specified file types: {', '.join(extensions)}")
        return 0
    logger.info("Found changed files", files=len(reviewable))

    diff = await reader.get_staged_diff()
    if not diff.strip():
        print("No diff content found.")
        return 0

    reviewer = CodeReviewer(config)
    verdict = await reviewer.review(diff, extensions)
    print(render_report(verdict, show_normal=config.show_normal), end="")
    return exit_code(verdict)


async def run_install_hook(args: argparse.Namespace) -> int:
    root = await StagedDiffReader(args.repo).repo_root()
    result = install_hook(root)
    if result.already_installed:
        print("Hook already exists.")
        return 1
    print("Hook installed successfully.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    command = run_install_hook if args.command == "install-hook" else run_review
    try:
        return asyncio.run(command(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except GitError as e:
        print(f"Git error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
