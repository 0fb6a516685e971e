"""
Main entry point and CLI for thriftX.

Provides command-line access to the catalog browse view, the AI text
generator and the HTTP API server.
"""

import asyncio
import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from thriftx.ai import GenerationMode, TextGenerationService
from thriftx.config import get_app_settings
from thriftx.error_handling import ErrorHandler, GenerationError, RepositoryError
from thriftx.filtering import CatalogQuery
from thriftx.models import (
    CATEGORY_OPTIONS,
    CONDITION_OPTIONS,
    SIZE_OPTIONS,
    CatalogResult,
    FilterConfig,
    Listing,
    SortKey,
)
from thriftx.repository import JsonFileListingRepository
from thriftx.services import CatalogService


logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else get_app_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger().setLevel(level)


def time_ago(created_at: datetime, now: Optional[datetime] = None) -> str:
    """Relative age of a listing for display ("Just now", "5h ago", "3d ago")."""
    now = now or datetime.now(timezone.utc)
    hours = int((now - created_at).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_listing(listing: Listing, now: Optional[datetime] = None) -> str:
    """
    Format a listing for console output.

    Args:
        listing: Listing to format
        now: Reference time for the relative age

    Returns:
        Formatted string representation of the listing
    """
    lines = []

    title = listing.title or "[No title]"
    if not listing.is_available:
        title += " [unavailable]"
    lines.append(f"👕 {title}")
    lines.append(f"   ID: {listing.id}")
    lines.append(f"   Points: {listing.points}")

    details = [listing.condition.value]
    if listing.item_type:
        details.insert(0, listing.item_type)
    if listing.category:
        details.insert(0, listing.category)
    if listing.size:
        details.append(f"size {listing.size}")
    lines.append(f"   {' · '.join(details)}")

    if listing.tags:
        lines.append(f"   Tags: {', '.join(listing.tags)}")
    if listing.location:
        lines.append(f"   Location: {listing.location}")
    if listing.owner_name:
        lines.append(f"   Listed by: {listing.owner_name}")

    lines.append(f"   {time_ago(listing.created_at, now)} · {listing.view_count} views")
    lines.append("")

    return "\n".join(lines)


def format_results(result: CatalogResult, now: Optional[datetime] = None) -> str:
    """
    Format a catalog result for console output.

    Args:
        result: Filtered and ordered catalog view

    Returns:
        Formatted string with the header counts and every listing
    """
    output = []
    plural = "" if result.total_count == 1 else "s"
    header = f"{result.total_count} item{plural} found"
    if result.active_filter_count:
        filters = "" if result.active_filter_count == 1 else "s"
        header += f" ({result.active_filter_count} filter{filters} active)"

    output.append(f"\n{'='*60}")
    output.append(header)
    output.append(f"{'='*60}\n")

    if not result.listings:
        output.append("No items found. Try adjusting your search criteria or filters.\n")
    for listing in result.listings:
        output.append(format_listing(listing, now))

    return "\n".join(output)


class _AllListingsRepository(JsonFileListingRepository):
    """JSON repository whose collection includes unavailable listings."""

    async def fetch_available_listings(self):
        return await self.all_listings()


async def run_browse(args: argparse.Namespace) -> int:
    """
    Run one catalog query against a JSON catalog file.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    settings = get_app_settings()
    path = args.file or settings.catalog_file
    repo_class = _AllListingsRepository if args.include_unavailable else JsonFileListingRepository

    service = CatalogService(
        repository=repo_class(path),
        error_handler=ErrorHandler(
            max_retries=settings.retry.max_retries,
            backoff_base_seconds=settings.retry.backoff_base_seconds,
        ),
        query=CatalogQuery(),
    )

    config = FilterConfig.from_ui(
        search=args.search,
        category=args.category,
        size=args.size,
        condition=args.condition,
        min_points=args.min_points,
        max_points=args.max_points,
        sort=args.sort,
    )
    logger.debug(f"Browsing {path} with {config}")

    try:
        result = await service.browse(config)
    except RepositoryError as e:
        logger.error(f"Failed to load catalog: {e}")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print(format_results(result))
    return 0


async def run_generate(args: argparse.Namespace) -> int:
    """Print generated text for a prompt."""
    service = TextGenerationService(get_app_settings().ai)
    try:
        text = await service.generate(args.prompt, args.mode)
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print(text)
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("thriftx.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="thriftx",
        description="Browse and list items on the thriftX clothing swap marketplace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Everything, newest first
  thriftx browse

  # Denim under 50 points, cheapest first
  thriftx browse --search denim --max-points 50 --sort points-low

  # Excellent-condition outerwear in size M
  thriftx browse --category Outerwear --size M --condition excellent

  # Ask the AI for a listing description
  thriftx generate "Title: Denim Jacket, Size: M, Condition: good"

  # Run the HTTP API
  thriftx serve --port 8000
        """
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    browse = subparsers.add_parser("browse", help="Filter and sort the catalog")
    browse.add_argument("--file", default=None, help="Catalog JSON file (default: bundled sample catalog)")
    browse.add_argument("--search", default="", help="Text matched against title, description and tags")
    browse.add_argument("--category", default="All", help=f"One of: {', '.join(CATEGORY_OPTIONS)}")
    browse.add_argument("--size", default="All", help=f"One of: {', '.join(SIZE_OPTIONS)}")
    browse.add_argument("--condition", default="All", help=f"One of: {', '.join(CONDITION_OPTIONS)}")
    # Kept as text: blank or non-numeric bounds are ignored, like the UI field
    browse.add_argument("--min-points", default=None, help="Minimum points (inclusive)")
    browse.add_argument("--max-points", default=None, help="Maximum points (inclusive)")
    browse.add_argument(
        "--sort",
        default=SortKey.NEWEST.value,
        choices=[key.value for key in SortKey],
        help="Sort order (default: newest)"
    )
    browse.add_argument(
        "--include-unavailable",
        action="store_true",
        help="Also show listings that are no longer available"
    )

    generate = subparsers.add_parser("generate", help="Generate listing text with AI")
    generate.add_argument("prompt", help="Item details or style preferences")
    generate.add_argument(
        "--mode",
        default=GenerationMode.DESCRIPTION.value,
        choices=[mode.value for mode in GenerationMode],
        help="What to generate (default: description)"
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    return parser


def main(argv=None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, 1 for error, 130 when interrupted)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "browse":
            return asyncio.run(run_browse(args))
        if args.command == "generate":
            return asyncio.run(run_generate(args))
        return run_serve(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\n\n⚠️  Interrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error in main: {str(e)}")
        print(f"❌ Unexpected error: {str(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
