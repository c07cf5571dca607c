"""Command line entry point.

  - serve:   run the HTTP API (jobs CRUD, stats, analysis)
  - analyze: run a single job description analysis and print the JSON result
"""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from job_tracker.config import settings
from job_tracker.exceptions import AnalysisError
from job_tracker.llm import AnalysisGateway
from job_tracker.utils import setup_logger


async def analyze_main(source: Path | None) -> int:
    """Analyze a description read from *source* (stdin when None)."""
    description = source.read_text() if source else sys.stdin.read()
    if len(description.strip()) < 10:
        logger.error("Job description must be at least 10 characters")
        return 1

    gateway = AnalysisGateway.from_settings(settings)
    try:
        result = await gateway.analyze(description)
    except AnalysisError:
        # Already logged by the gateway.
        return 1
    print(result.model_dump_json(indent=2))
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="job-tracker",
        description="Job application tracker with AI job description analysis",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help=f"Bind address (default: {settings.host})")
    serve_parser.add_argument("--port", type=int, help=f"Port (default: {settings.port})")

    analyze_parser = subparsers.add_parser("analyze", help="Summarize a job description and list its top skills")
    analyze_parser.add_argument("file", nargs="?", type=Path, help="Job description file (default: stdin)")

    return parser.parse_args(argv)


def cli() -> None:
    """CLI entry point."""
    args = parse_args()
    setup_logger(settings.log_level, settings.logs_dir)

    match args.command:
        case "serve":
            from job_tracker.api.main import serve

            serve(host=args.host, port=args.port)
        case "analyze":
            sys.exit(asyncio.run(analyze_main(args.file)))
        case _:
            print("Please specify a command: serve or analyze")
            print("  Example: job-tracker analyze description.txt")
            sys.exit(1)


if __name__ == "__main__":
    cli()
