"""CLI entry point for package-auditor."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path

from package_auditor.errors import AuditError
from package_auditor.logging import configure_logging, get_logger, progress_logger, status_logger
from package_auditor.models import DEFAULT_OUTPUT_FILE_NAME, AuditConfig, OutputKind

ENV_BASE_URL = "BITBUCKET_URL"
ENV_PROJECT = "BITBUCKET_PROJECT"
ENV_TOKEN = "BITBUCKET_TOKEN"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="package-auditor",
        description=(
            "Report which version of a NuGet package every repository "
            "in a Bitbucket project declares in its .csproj files."
        ),
    )
    parser.add_argument(
        "--base-url",
        help=f"Bitbucket instance URL; the protocol may be omitted (env: {ENV_BASE_URL}).",
    )
    parser.add_argument(
        "--project",
        help=f"Key of the project whose repositories are scanned (env: {ENV_PROJECT}).",
    )
    parser.add_argument(
        "--package",
        help="Package to check. Must match the Include attribute in the .csproj files exactly.",
    )
    parser.add_argument(
        "--token",
        help=f"HTTP access token for Bitbucket (env: {ENV_TOKEN}).",
    )
    parser.add_argument(
        "--output-kind",
        choices=[k.value for k in OutputKind],
        default=OutputKind.console.value,
        help="Print the report, or save it as a .txt or .md file.",
    )
    parser.add_argument(
        "--ignore-repo-prefix",
        help="Skip repositories whose slug starts with this prefix.",
    )
    parser.add_argument(
        "--output-file-name",
        default=DEFAULT_OUTPUT_FILE_NAME,
        help="Base name of the report file. Ignored for console output.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the report file (defaults to the current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Open the terminal UI instead of running headless.",
    )
    return parser


def _resolve(args: argparse.Namespace) -> dict[str, str]:
    """Command-line values with environment fallbacks."""
    return {
        "base_url": args.base_url or os.environ.get(ENV_BASE_URL, ""),
        "project": args.project or os.environ.get(ENV_PROJECT, ""),
        "package": args.package or "",
        "token": args.token or os.environ.get(ENV_TOKEN, ""),
        "ignore_repo_prefix": args.ignore_repo_prefix or "",
    }


def main(argv: list[str] | None = None) -> None:
    """Run an audit from the command line, or launch the TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. BITBUCKET_TOKEN)

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=bool(args.verbose))
    values = _resolve(args)

    if args.interactive:
        from package_auditor.app import PackageAuditorApp

        PackageAuditorApp(defaults=values).run()
        return

    missing = [
        f"--{key.replace('_', '-')}"
        for key in ("base_url", "project", "package", "token")
        if not values[key]
    ]
    if missing:
        parser.error(f"missing required option(s): {', '.join(missing)}")

    config = AuditConfig(
        base_url=values["base_url"],
        project=values["project"],
        package=values["package"],
        token=values["token"],
        ignore_repo_prefix=values["ignore_repo_prefix"] or None,
        output_kind=OutputKind(args.output_kind),
        output_file_name=args.output_file_name,
    )

    from package_auditor.auditor import run_audit
    from package_auditor.output import deliver_report

    logger = get_logger()
    try:
        result = asyncio.run(
            run_audit(config, on_status=status_logger(), on_progress=progress_logger())
        )
        path = deliver_report(
            result.report,
            config.output_kind,
            config.output_file_name,
            directory=args.output_dir,
        )
    except AuditError as exc:
        parser.exit(1, f"package-auditor failed: {exc}\n")

    if result.skipped_files:
        logger.warning("%d file(s) could not be read and were left out", result.skipped_files)
    if path is not None:
        print(f"Report written to {path}")


if __name__ == "__main__":
    main(sys.argv[1:])
