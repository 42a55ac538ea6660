"""Print the current price board to the terminal."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from priceboard.catalog.models import Mode
from priceboard.db.repository import load_aggregator
from priceboard.db.session import create_engine_from_env
from priceboard.utils.money import format_price


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the cheapest store per product.")
    parser.add_argument("query", nargs="?", default="", help="Filter products by text.")
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in Mode],
        default=Mode.BEST.value,
        help="Which price to show (default: best).",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        default=False,
        dest="show_all",
        help="Include products with no recorded price.",
    )
    return parser


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=logging.WARNING)
    args = _build_parser().parse_args()
    aggregator = load_aggregator(create_engine_from_env())
    rows = aggregator.board(Mode.parse(args.mode), args.query, only_with_prices=not args.show_all)
    for row in rows:
        print(row.label)
        for cell in row.cells:
            if cell.display is None:
                continue
            tags = []
            if cell.display.is_sale:
                tags.append("SALE")
            if cell.is_cheapest:
                tags.append("cheapest")
                if row.save_pct is not None:
                    tags.append(f"save {row.save_pct}%")
            suffix = f" [{', '.join(tags)}]" if tags else ""
            print(f"  {cell.store.name}: {format_price(cell.display.price)} ({cell.age_days}d ago){suffix}")
    if not rows:
        print("No matching products")


if __name__ == "__main__":
    main()
