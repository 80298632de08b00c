"""Fetch a single patent record from the command line and print it as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

import httpx

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.services import (
    DocumentFetcher,
    InclusionOptions,
    PatentContentService,
    PatentService,
    PatentServiceError,
    SerpApiClient,
)
from app.services.formatter import INCLUDE_SECTIONS

LOGGER = logging.getLogger("fetch_patent")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a patent record by URL or identifier")
    parser.add_argument("patent", help='Patent URL or ID, e.g. "US1234567A" or "patent/US1234567A/en"')
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        help=f"Section to include (repeatable): {', '.join(INCLUDE_SECTIONS)}",
    )
    parser.add_argument("--max-length", type=positive_int, help="Character budget for every included section")
    parser.add_argument(
        "--content-only",
        action="store_true",
        help="Skip the metadata query and parse claims/description from the patent page",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> dict:
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
        content = PatentContentService(
            DocumentFetcher(timeout=settings.request_timeout_seconds, client=client),
            settings.patents_base_url,
        )
        if args.content_only:
            result = await content.fetch_content(args.patent, max_length=args.max_length)
            return result.model_dump(exclude_none=True)

        if not settings.serpapi_api_key:
            raise SystemExit("SERPAPI_API_KEY environment variable is not set.")
        serpapi = SerpApiClient(
            api_key=settings.serpapi_api_key,
            base_url=settings.serpapi_base_url,
            timeout=settings.request_timeout_seconds,
            client=client,
        )
        service = PatentService(serpapi, content, language=settings.default_language)
        options = InclusionOptions.from_include(args.include, max_length=args.max_length)
        record = await service.fetch_patent(args.patent, options)
        return record.model_dump(exclude_none=True)


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)
    try:
        payload = asyncio.run(run(args))
    except PatentServiceError as exc:
        LOGGER.error("%s", exc)
        sys.exit(1)
    print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
