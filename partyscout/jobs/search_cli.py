"""CLI job that runs a party venue search and prints the result as JSON."""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from partyscout.core.config import ConfigError, get_settings
from partyscout.models import PartyRequest, to_json_dict
from partyscout.services.venue_search import search_party_venues
from partyscout.vendors.google_places import PlacesProviderError

logger = logging.getLogger(__name__)


def run_search_job(request: PartyRequest, *, indent: Optional[int] = 2) -> str:
    settings = get_settings()
    api_key = settings.require_api_key()

    result = search_party_venues(request, api_key=api_key)
    logger.info("Search for ZIP %s returned %d venues", request.zip_code, len(result.venues))
    return json.dumps(to_json_dict(result), indent=indent)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search birthday party venues near a ZIP code")
    parser.add_argument("--age", type=int, required=True, help="Age of the birthday child")
    parser.add_argument("--zip", dest="zip_code", required=True, help="US ZIP code to search around")
    parser.add_argument(
        "--type",
        dest="party_types",
        action="append",
        default=[],
        help="Party type id (repeatable), e.g. active_play",
    )
    parser.add_argument("--guests", dest="guest_count", type=int, default=10, help="Number of guests")
    parser.add_argument("--budget-min", dest="budget_min", type=int, help="Minimum budget in dollars")
    parser.add_argument("--budget-max", dest="budget_max", type=int, help="Maximum budget in dollars")
    parser.add_argument(
        "--setting",
        choices=("any", "indoor", "outdoor"),
        default="any",
        help="Indoor/outdoor preference",
    )
    parser.add_argument(
        "--max-distance",
        dest="max_distance_miles",
        type=int,
        default=10,
        help="Search radius in miles",
    )
    parser.add_argument("--date", help="Optional party date (ISO format), echoed back")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.age < 1 or args.guest_count < 1 or args.max_distance_miles < 1:
        parser.error("--age, --guests and --max-distance must be positive")

    request = PartyRequest(
        age=args.age,
        party_types=args.party_types,
        guest_count=args.guest_count,
        zip_code=args.zip_code,
        budget_min=args.budget_min,
        budget_max=args.budget_max,
        setting=args.setting,
        max_distance_miles=args.max_distance_miles,
        date=args.date,
    )

    try:
        output = run_search_job(request)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except PlacesProviderError as exc:
        logger.error("Party search failed: %s", exc)
        raise SystemExit(1) from exc

    sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
