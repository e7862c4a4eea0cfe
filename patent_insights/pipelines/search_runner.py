#!/usr/bin/env python
"""
Patent Search Runner
patent_insights/pipelines/search_runner.py

Runs one patent portfolio search from the command line and prints a
summary (or the full JSON result).

Usage:
    python -m patent_insights.pipelines.search_runner "Tesla Inc."
    python -m patent_insights.pipelines.search_runner US0378331005 --theme batteries
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Optional

import structlog

from patent_insights.config import configure_logging, get_api_config
from patent_insights.models.patent_insights import SeriesCategory
from patent_insights.pipelines.patent_search import PatentSearchService
from patent_insights.pipelines.search_state import LiveFailure, LiveSuccess, SearchOutcome

logger = structlog.get_logger()

SUMMARY_PREVIEW = 300


def _source_label(outcome: SearchOutcome) -> str:
    if isinstance(outcome, LiveSuccess):
        return "live"
    if isinstance(outcome, LiveFailure):
        return "synthetic (degraded)"
    return "synthetic"


def _print_summary(outcome: SearchOutcome) -> None:
    """Print search result summary."""
    result = outcome.result
    print("\n" + "=" * 60)
    print("Patent Search Complete")
    print("=" * 60)
    print(f"Query: {result.query.value} ({result.query.type.value})")
    if result.query.theme:
        print(f"Theme: {result.query.theme}")
    print(f"Data source: {_source_label(outcome)}")
    print(f"Total patents: {result.insights.total_patents}")

    print("\nMetric series:")
    for category in SeriesCategory:
        print(f"  {category.value}: {len(result.insights.series(category))} points")

    summary = result.summary
    if len(summary) > SUMMARY_PREVIEW:
        summary = summary[:SUMMARY_PREVIEW] + "..."
    print(f"\nSummary:\n  {summary}")


async def run_search(
    query: str,
    *,
    theme: Optional[str] = None,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
) -> SearchOutcome:
    config = get_api_config().with_overrides(base_url=base_url, bearer_token=token)
    logger.info(
        "Starting patent search",
        query=query,
        theme=theme,
        base_url=config.base_url,
        token=config.masked_token(),
    )

    outcome = await PatentSearchService(config).resolve(query, theme)

    logger.info(
        "Patent search finished",
        source=_source_label(outcome),
        patents=outcome.result.insights.total_patents,
        reason=getattr(outcome, "reason", None),
    )
    return outcome


async def main() -> None:
    """CLI entry point for the patent search."""
    parser = argparse.ArgumentParser(
        description="Patent portfolio search: company, ISIN, URL or technology theme",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Company search
  python -m patent_insights.pipelines.search_runner "Tesla Inc."

  # ISIN search narrowed to a theme
  python -m patent_insights.pipelines.search_runner US0378331005 --theme batteries

  # Explicit API settings (or set PATENT_API_BASE_URL / PATENT_API_BEARER_TOKEN)
  python -m patent_insights.pipelines.search_runner "artificial intelligence" --base-url https://api.patents.com/v1 --token YOUR_TOKEN

  # Full JSON output
  python -m patent_insights.pipelines.search_runner https://apple.com --json
        """
    )
    parser.add_argument("query", help="Company name, ISIN, URL or technology theme")
    parser.add_argument("--theme", type=str, default=None, help="Optional technology theme")
    parser.add_argument("--base-url", type=str, default=None, help="Patent API base URL")
    parser.add_argument("--token", type=str, default=None, help="Patent API bearer token")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: LOG_LEVEL or INFO)")

    args = parser.parse_args()
    configure_logging(args.log_level)

    outcome = await run_search(
        args.query,
        theme=args.theme,
        base_url=args.base_url,
        token=args.token,
    )

    if args.json:
        print(outcome.result.model_dump_json(by_alias=True, indent=2))
    else:
        _print_summary(outcome)


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
