"""
Build a composite index from columns of a CSV file.

Prints the pairwise correlation summary and Cronbach's alpha for the chosen
items, optionally writes the composite scores to a CSV, and emits a one-line
JSON summary on stdout.

Usage:
    python scripts/build_index.py states.csv \\
        --items life_exp murder illiteracy --name quality_of_life \\
        --method rescale --lower 0 --upper 100 --output index.csv

Exit codes:
    0 - Success
    1 - Input error (unreadable file, unknown or unusable columns)
    2 - Computation error (constant items, zero variance, bad interval)
"""
import argparse
import logging
import sys
from typing import List, Optional

logger = logging.getLogger("build_index")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a composite index from columns of a CSV file."
    )
    parser.add_argument("csv_path", help="Path to the input CSV file")
    parser.add_argument(
        "--items",
        nargs="+",
        required=True,
        help="Columns to combine (at least 2)",
    )
    parser.add_argument("--name", default="index", help="Name of the composite")
    parser.add_argument(
        "--index-col",
        default=None,
        help="Column holding row labels (e.g. state names)",
    )
    parser.add_argument(
        "--method",
        choices=["rescale", "standardize"],
        default="rescale",
        help="Transform applied to every item before combining",
    )
    parser.add_argument("--lower", type=float, default=None, help="Rescale lower bound")
    parser.add_argument("--upper", type=float, default=None, help="Rescale upper bound")
    parser.add_argument(
        "--no-auto-reverse",
        action="store_true",
        help="Do not reverse-score anti-correlated items",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the composite scores to this CSV path",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    import pandas as pd

    from composite_index.core.correlation import summarize_correlations
    from composite_index.core.errors import (
        DuplicateItemError,
        IndexConstructionError,
        InsufficientObservationsError,
        MissingValuesError,
        UnknownColumnError,
    )
    from composite_index.core.index import build_index
    from composite_index.core.item_set import select_items
    from composite_index.core.logging_config import setup_logging
    from composite_index.schemas import IndexSummary

    setup_logging()

    try:
        table = pd.read_csv(args.csv_path, index_col=args.index_col)
    except (OSError, ValueError) as exc:
        logger.error("Failed to read %s: %s", args.csv_path, exc)
        return 1

    try:
        item_set = select_items(table, args.items, name=args.name)
    except (
        UnknownColumnError,
        DuplicateItemError,
        MissingValuesError,
        InsufficientObservationsError,
    ) as exc:
        logger.error("Invalid item selection: %s", exc)
        return 1
    except IndexConstructionError as exc:
        logger.error("Invalid item set: %s", exc)
        return 2

    try:
        correlations = summarize_correlations(item_set)
        report = build_index(
            item_set,
            method=args.method,
            auto_reverse=not args.no_auto_reverse,
            lower=args.lower,
            upper=args.upper,
        )
    except IndexConstructionError as exc:
        logger.error("Index construction failed: %s", exc)
        return 2

    for pair in correlations:
        print(
            f"{pair.x_column:>20} ~ {pair.y_column:<20} "
            f"r = {pair.r:+.2f} {pair.significance_marker}"
        )

    reliability = report.reliability
    print(
        f"Cronbach's alpha ({item_set.name}): {reliability.raw_alpha:.4f} "
        f"[{reliability.interpretation}], "
        f"reversed: {', '.join(reliability.reversed_items) or 'none'}"
    )

    if args.output:
        try:
            report.composite.to_csv(args.output, header=True)
        except OSError as exc:
            logger.error("Failed to write %s: %s", args.output, exc)
            return 1
        logger.info("Wrote %d scores to %s", len(report.composite), args.output)

    summary = IndexSummary.from_report(report, correlations)
    print(summary.model_dump_json(), flush=True)

    return 0


if __name__ == "__main__":
    sys.exit(main())
