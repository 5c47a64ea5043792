"""biver CLI entry points.
This module exposes status, commit, discard, checkout, and branch commands.
It maps argparse commands onto SDK calls and outcomes onto exit codes.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Any, Callable, Sequence

from core.config import BiverConfig, parse_status_limit
from core.constants import (
    EXIT_FATAL,
    EXIT_NOTHING_TO_DO,
    EXIT_SUCCESS,
    EXIT_USER_ERROR,
    TRACKED_FILE_ENV,
)
from core.errors import BiverConfigError, BiverError
from core.logging_config import configure_logging
from core.types import OperationOutcome
from history.graph_formatter import format_versions
from store.repository_sdk import BiverClient

ConfirmFn = Callable[[str], bool]

_OUTCOME_MESSAGES = {
    OperationOutcome.NOTHING_TO_COMMIT: "Nothing to commit: tracked file matches head.",
    OperationOutcome.BRANCH_REQUIRED: (
        "Head is detached. Pass --branch NAME to commit onto a new branch."
    ),
    OperationOutcome.BRANCH_ALREADY_EXISTS: (
        "Branch already exists. Choose a new name or check the branch out first."
    ),
    OperationOutcome.NOTHING_TO_DISCARD: "Nothing to discard: tracked file matches head.",
    OperationOutcome.UNCOMMITTED_CHANGES: (
        "Tracked file has uncommitted changes. Commit or discard them, or pass --force."
    ),
    OperationOutcome.UNKNOWN_TARGET: "No branch or version matches the checkout target.",
    OperationOutcome.NOT_INITIALIZED: "No versions committed yet.",
}

_OUTCOME_EXIT_CODES = {
    OperationOutcome.OK: EXIT_SUCCESS,
    OperationOutcome.NOTHING_TO_COMMIT: EXIT_NOTHING_TO_DO,
    OperationOutcome.NOTHING_TO_DISCARD: EXIT_NOTHING_TO_DO,
    OperationOutcome.NOT_INITIALIZED: EXIT_NOTHING_TO_DO,
    OperationOutcome.BRANCH_REQUIRED: EXIT_USER_ERROR,
    OperationOutcome.BRANCH_ALREADY_EXISTS: EXIT_USER_ERROR,
    OperationOutcome.UNCOMMITTED_CHANGES: EXIT_USER_ERROR,
    OperationOutcome.UNKNOWN_TARGET: EXIT_USER_ERROR,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="biver", description="Single-file version history")
    parser.add_argument(
        "-f",
        "--file",
        help=f"Tracked file path, overrides {TRACKED_FILE_ENV}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_status_command(subparsers)
    _add_commit_command(subparsers)
    _add_discard_command(subparsers)
    _add_checkout_command(subparsers)
    _add_branches_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None, confirm: ConfirmFn | None = None) -> int:
    """Run the biver CLI.

    Args:
        argv: Optional argument vector.
        confirm: Optional yes/no prompt used by discard.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.file)
        if args.command == "status":
            return _run_status_command(client, args)
        if args.command == "commit":
            return _run_commit_command(client, args)
        if args.command == "discard":
            return _run_discard_command(client, args, confirm or _prompt_yes_no)
        if args.command == "checkout":
            return _run_checkout_command(client, args)
        if args.command == "branches":
            return _run_branches_command(client)
    except BiverConfigError as error:
        print(f"ERROR: {error}", file=sys.stderr)
        return EXIT_USER_ERROR
    except BiverError as error:
        print(f"ERROR: {error}", file=sys.stderr)
        return EXIT_FATAL
    parser.error(f"Unsupported command: {args.command}")
    return EXIT_USER_ERROR


def _build_client(tracked_file: str | None) -> BiverClient:
    """Build SDK client with optional tracked-file override.

    Args:
        tracked_file: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = BiverConfig.from_env()
    if tracked_file:
        config = replace(config, tracked_file=Path(tracked_file).expanduser())
    configure_logging(config.log_level)
    return BiverClient(config)


def _run_status_command(client: BiverClient, args: argparse.Namespace) -> int:
    """Handle status command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    limit = parse_status_limit(args.limit, source="--limit") if args.limit is not None else None
    view = client.status(show_all=args.all, limit=limit)
    if view is None:
        return _report_outcome(OperationOutcome.NOT_INITIALIZED)
    for line in view.lines():
        print(line)
    return EXIT_SUCCESS


def _run_commit_command(client: BiverClient, args: argparse.Namespace) -> int:
    """Handle commit command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.commit(description=args.description or "", branch=args.branch)
    if result.outcome is not OperationOutcome.OK or result.version is None:
        return _report_outcome(result.outcome)
    data = client.load()
    if data is not None:
        for line in format_versions(data, [result.version]):
            print(line)
    return EXIT_SUCCESS


def _run_discard_command(
    client: BiverClient,
    args: argparse.Namespace,
    confirm: ConfirmFn,
) -> int:
    """Handle discard command, prompting only when there are changes to lose."""
    needs_prompt = not args.yes and client.has_uncommitted_changes()
    if needs_prompt and not confirm("Discard uncommitted changes to the tracked file?"):
        print("Aborted.")
        return EXIT_NOTHING_TO_DO
    result = client.discard()
    if result.outcome is not OperationOutcome.OK:
        return _report_outcome(result.outcome)
    print("Discarded uncommitted changes.")
    return EXIT_SUCCESS


def _run_checkout_command(client: BiverClient, args: argparse.Namespace) -> int:
    """Handle checkout command."""
    result = client.checkout(args.target, force=args.force)
    if result.outcome is not OperationOutcome.OK:
        return _report_outcome(result.outcome)
    data = client.load()
    if data is not None:
        for line in format_versions(data, [data.head_version()]):
            print(line)
    return EXIT_SUCCESS


def _run_branches_command(client: BiverClient) -> int:
    """Handle branches command."""
    lines = client.branches()
    if not lines:
        return _report_outcome(OperationOutcome.NOT_INITIALIZED)
    for line in lines:
        print(line)
    return EXIT_SUCCESS


def _report_outcome(outcome: OperationOutcome) -> int:
    """Print the message for a non-OK outcome and map it to an exit code."""
    exit_code = _OUTCOME_EXIT_CODES[outcome]
    stream = sys.stdout if exit_code == EXIT_NOTHING_TO_DO else sys.stderr
    print(_OUTCOME_MESSAGES[outcome], file=stream)
    return exit_code


def _prompt_yes_no(question: str) -> bool:
    answer = input(f"{question} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _add_status_command(subparsers: Any) -> None:
    """Register status subcommand."""
    parser = subparsers.add_parser("status", help="Show head lineage and branch graph")
    parser.add_argument("--all", action="store_true", help="Show every version in the lineage")
    parser.add_argument("--limit", help="Rows to show nearest head")


def _add_commit_command(subparsers: Any) -> None:
    """Register commit subcommand."""
    parser = subparsers.add_parser("commit", help="Commit current changes to a new version")
    parser.add_argument("description", nargs="?", metavar="DESCRIPTION", help="Version description")
    parser.add_argument("-b", "--branch", help="Create a new branch for this commit")


def _add_discard_command(subparsers: Any) -> None:
    """Register discard subcommand."""
    parser = subparsers.add_parser("discard", help="Restore the head version into the file")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")


def _add_checkout_command(subparsers: Any) -> None:
    """Register checkout subcommand."""
    parser = subparsers.add_parser("checkout", help="Switch head to a branch or version id")
    parser.add_argument("target", help="Branch name or version id")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite uncommitted changes in the tracked file",
    )


def _add_branches_command(subparsers: Any) -> None:
    """Register branches subcommand."""
    subparsers.add_parser("branches", help="List branches")
