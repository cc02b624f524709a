#!/usr/bin/env python
"""
Fuzzy-deduplicate a name column in a CSV file.

Similar spellings ("Acme Corp", "ACME corp.", "Acme Corporation") are
merged onto the most frequent spelling using Levenshtein similarity of
the normalized names.

Example Usage:
    python scripts/dedupe_names.py data/raw/vendors.csv --column vendor
    python scripts/dedupe_names.py data/raw/vendors.csv --column vendor \\
        --threshold 0.9 --output-column vendor_clean --output data/vendors_clean.csv
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from folio_core.cleaning.dedup import dedupe_column
from folio_core.data.csv_loader import load_csv
from folio_core.utils.constants import DEFAULT_SIMILARITY_THRESHOLD


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Fuzzy-deduplicate a name column in a CSV file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("input", help="Input CSV file")
    parser.add_argument("--column", required=True, help="Name column to deduplicate")
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_SIMILARITY_THRESHOLD,
        help=f"Minimum similarity in (0, 1] (default: {DEFAULT_SIMILARITY_THRESHOLD})"
    )
    parser.add_argument(
        "--max-distance",
        type=int,
        default=None,
        help="Optional absolute edit-distance cutoff"
    )
    parser.add_argument(
        "--output-column",
        default=None,
        help="Write canonical names to this column instead of overwriting"
    )
    parser.add_argument("--output", "-o", default=None, help="Output CSV (default: print mapping only)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print detailed output")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        df = load_csv(args.input)
        cleaned = dedupe_column(
            df,
            args.column,
            threshold=args.threshold,
            output_column=args.output_column,
            max_distance=args.max_distance,
        )

        target = args.output_column or args.column
        merged = (
            df[[args.column]]
            .assign(canonical=cleaned[target])
            .dropna()
            .drop_duplicates()
        )
        merged = merged[merged[args.column] != merged["canonical"]]

        print(f"\nUnique names before: {df[args.column].nunique()}")
        print(f"Unique names after:  {cleaned[target].nunique()}")
        if merged.empty:
            print("\nNo spellings were merged.")
        else:
            print("\nMerged spellings:")
            for original, canonical in merged.itertuples(index=False):
                print(f"  {original!r} → {canonical!r}")

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            cleaned.to_csv(output_path, index=False)
            print(f"\n✓ Saved to {output_path}")
        return 0

    except FileNotFoundError as e:
        print(f"\n✗ Error: File not found", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    except KeyError as e:
        print(f"\n✗ Error: {e.args[0]}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"\n✗ Error: Invalid parameter", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
