"""
Price calculator command line.

Finds the best price for a product, venue and member combination. Any of the
three that is not given by ID is picked at random.

Usage:
    price-calculate
    price-calculate --product 1 --venue 1 --member 2
    python -m pricing_calculator.cli --data-dir ./data --seed 7
"""
import argparse
import json
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from .config.settings import get_settings
from .data.repository import PricingRepository
from .engine import Calculator, EntityNotFoundError, PricingError, ValidModifier
from .logging_config import configure_logging


EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_DATA_ERROR = 2


def format_price(price: Decimal, symbol: str = '£') -> str:
    return f"{symbol}{price:,.2f}"


def modifiers_table(valid_modifiers: tuple[ValidModifier, ...]) -> pd.DataFrame:
    """One row per valid modifier, in the order they were evaluated."""
    return pd.DataFrame(
        [
            {
                'ID': vm.modifier.id,
                'Name': vm.modifier.name,
                'Conditions': json.dumps(vm.modifier.conditions_payload()),
                'Adjustment type': vm.modifier.adjustment_type.value,
                'Adjustment value': str(vm.modifier.adjustment_value),
                'New price': str(vm.price),
            }
            for vm in valid_modifiers
        ],
        columns=['ID', 'Name', 'Conditions', 'Adjustment type', 'Adjustment value', 'New price'],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='price-calculate',
        description=(
            "Find the best price for a product, venue, member combination. If the ID for any of "
            "these three entities is not passed, one will be selected at random."
        ),
    )
    parser.add_argument("--product", help="ID of the product to calculate a price for")
    parser.add_argument("--venue", help="ID of the venue to calculate a price for")
    parser.add_argument("--member", help="ID of the member to calculate a price for")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding the pricing CSV files")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random entity selection")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv: Optional[list[str]] = None, now: Optional[datetime] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    now = now or datetime.now()
    symbol = settings.currency_symbol

    try:
        repository = PricingRepository(args.data_dir or settings.data_dir, seed=args.seed)

        product = repository.get_product(args.product, now) if args.product else repository.random_product(now)
        print(f"Product {product.id}: {product.name}")

        venue = repository.get_venue(args.venue) if args.venue else repository.random_venue()
        print(f"Venue {venue.id}: {venue.name} ({venue.location})")

        member = repository.get_member(args.member) if args.member else repository.random_member()
        print(
            f"Member {member.id}: {member.name} "
            f"({member.membership_type} member, {member.age_on(now.date())} years old)"
        )

        quote = Calculator(clock=lambda: now).calculate(product, venue, member)
    except (EntityNotFoundError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except PricingError as e:
        logger.error(f"Stored pricing data is invalid: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR

    print(f"Original product price: {format_price(quote.base_price, symbol)}")

    if not quote.valid_modifiers:
        print("No valid pricing modifiers for this product/venue/member combination.")
    else:
        print("The conditions were met for the following pricing modifiers:")
        print(modifiers_table(quote.valid_modifiers).to_string(index=False))

    print(f"Best price: {format_price(quote.best_price, symbol)}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
