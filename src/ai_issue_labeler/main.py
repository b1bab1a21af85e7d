"""CLI entrypoint for the issue labeler.

Designed to run as a GitHub Actions step on `issues` events, but every input can
also be given on the command line for local runs.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ai_issue_labeler import __version__
from ai_issue_labeler.config import LabelerSettings
from ai_issue_labeler.event import IssueContext, load_issue_context, split_repository
from ai_issue_labeler.github.client import GitHubLabelClient
from ai_issue_labeler.labeling.colors import FixedColorGenerator
from ai_issue_labeler.llm.factory import LLMFactory
from ai_issue_labeler.logging import configure_logging
from ai_issue_labeler.orchestrator import LabelingFailedError, LabelingOrchestrator

logger = logging.getLogger(__name__)

OUTPUT_NAME = "labels-applied"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-labeler",
        description="Suggest and apply GitHub issue labels with an AI model",
    )
    parser.add_argument("--version", action="version", version=f"ai-issue-labeler {__version__}")
    parser.add_argument(
        "--event-path",
        type=Path,
        default=None,
        help="Event payload JSON (defaults to GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Target repository in the form 'owner/repo' (defaults to GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--issue-number",
        type=int,
        default=None,
        help="Label this issue instead of reading an event payload",
    )
    parser.add_argument("--title", default="", help="Issue title (with --issue-number)")
    parser.add_argument("--body", default=None, help="Issue body (with --issue-number)")
    return parser


def resolve_issue(args: argparse.Namespace, settings: LabelerSettings) -> IssueContext | None:
    """Capture the issue this run acts on, from flags or the event payload."""

    repository = args.repository or settings.repository

    if args.issue_number is not None:
        if not repository:
            raise ValueError("--repo (or GITHUB_REPOSITORY) is required with --issue-number")
        owner, repo = split_repository(repository)
        return IssueContext(
            owner=owner, repo=repo, number=args.issue_number, title=args.title, body=args.body
        )

    event_path = args.event_path or settings.event_path
    if event_path is None:
        return None
    return load_issue_context(event_path, repository=repository)


def write_step_output(path: Path | None, value: str) -> None:
    """Append the labels-applied output for GitHub Actions, when running there."""

    if path is None:
        return
    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{OUTPUT_NAME}={value}\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LabelerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        issue = resolve_issue(args, settings)
        if issue is None:
            logger.info(
                "This run was triggered by an event that is not related to an issue; exiting"
            )
            write_step_output(settings.output_path, "")
            return 0

        llm = LLMFactory.create(settings.llm)
        client = GitHubLabelClient(
            token=settings.github_token,
            repository=issue.repository,
            base_url=settings.github_base_url,
        )
        try:
            orchestrator = LabelingOrchestrator(
                client=client,
                llm=llm,
                max_existing_labels=settings.max_existing_labels,
                max_new_labels=settings.max_new_labels,
                colors=FixedColorGenerator(settings.label_color) if settings.label_color else None,
                use_structured_output=settings.structured_output,
            )
            outcome = orchestrator.run(issue)
        finally:
            client.close()

        for warning in outcome.warnings:
            logger.warning(warning, extra={"issue_number": issue.number})

        write_step_output(settings.output_path, outcome.output)
        print(outcome.output)
        return 0

    except LabelingFailedError as e:
        print(f"Labeling failed ({e.stage.value}): {e}", file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Action failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
