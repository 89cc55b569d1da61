"""Command-line entry point for CLV insights."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from clv_insights.config import config
from clv_insights.exceptions import CLVInsightsError
from clv_insights.handlers.customers import (
    complete_customer,
    ingest_customers,
    recommend_actions,
)
from clv_insights.infrastructure.dependency_injection import DependenciesContainer
from clv_insights.models.schemas import Customer, PartialCustomer
from clv_insights.services.portfolio import search_customers

# Configure logging (stdout is reserved for JSON output)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr),
    ],
)
logger = logging.getLogger(__name__)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def run_ingest(container: DependenciesContainer, path: Path, summary: bool, search: str | None) -> None:
    """Ingest a local CSV file and print customers (and optionally the summary)."""
    csv_content = path.read_text(encoding="utf-8-sig")
    result = asyncio.run(ingest_customers(container.llm_pipeline(), csv_content))

    customers = result.customers
    if search:
        customers = search_customers(customers, search)
        logger.info(f"{len(customers)} of {len(result.customers)} customers match '{search}'")

    if summary:
        _print_json(result.model_dump(mode="json", by_alias=True))
    else:
        _print_json([c.model_dump(mode="json", by_alias=True) for c in customers])


def run_complete(container: DependenciesContainer, args: argparse.Namespace) -> None:
    """Complete a customer from command-line attributes."""
    partial = PartialCustomer(
        id=args.id,
        state=args.state,
        coverage=args.coverage,
        education=args.education,
        income=args.income,
        monthly_premium_auto=args.monthly_premium_auto,
        months_since_last_claim=args.months_since_last_claim,
        number_of_policies=args.number_of_policies,
    )
    customer = asyncio.run(complete_customer(container.customer_completer(), partial))
    _print_json(customer.model_dump(mode="json", by_alias=True))


def run_recommend(container: DependenciesContainer, path: Path) -> None:
    """Print marketing recommendations for a customer stored as JSON."""
    customer = Customer.model_validate_json(path.read_text(encoding="utf-8"))
    actions = asyncio.run(recommend_actions(container.marketing_advisor(), customer))
    _print_json([a.model_dump(mode="json", by_alias=True) for a in actions])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Customer lifetime value analytics powered by Gemini"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Extract customers from a CSV file")
    ingest.add_argument("file", type=Path, help="Customer CSV file with a header line")
    ingest.add_argument(
        "--summary",
        action="store_true",
        help="Print the portfolio summary together with the customers",
    )
    ingest.add_argument("--search", help="Only print customers matching id, state or policy type")

    complete = subparsers.add_parser("complete", help="Complete a partially known customer")
    complete.add_argument("--id", required=True, help="Customer ID")
    complete.add_argument("--state")
    complete.add_argument("--coverage")
    complete.add_argument("--education")
    complete.add_argument("--income", type=float)
    complete.add_argument("--monthly-premium-auto", type=float)
    complete.add_argument("--months-since-last-claim", type=int)
    complete.add_argument("--number-of-policies", type=int)

    recommend = subparsers.add_parser("recommend", help="Marketing actions for one customer")
    recommend.add_argument("file", type=Path, help="JSON file holding one customer")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point with CLI argument parsing."""
    args = build_parser().parse_args(argv)

    try:
        config.validate()
        container = DependenciesContainer()

        if args.command == "ingest":
            run_ingest(container, args.file, args.summary, args.search)
        elif args.command == "complete":
            run_complete(container, args)
        else:
            run_recommend(container, args.file)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except CLVInsightsError as e:
        logger.error(f"{e} Please try again.")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
