#!/usr/bin/env python
"""
Cluster the rows of a CSV table with k-means.

Selects numeric feature columns, optionally standardizes them, fits
KMeans and prints cluster sizes and centers. With --elbow, prints the
inertia for a range of k instead.

Example Usage:
    python scripts/cluster_csv.py data/raw/mortgages.csv --k 4 \\
        --features loan_amount interest_rate income --clean-mortgage
    python scripts/cluster_csv.py data/raw/customers.csv --elbow 10
    python scripts/cluster_csv.py data/raw/customers.csv --config configs/clusters.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd
import yaml

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from folio_core.cleaning.tidy import clean_mortgage_records
from folio_core.config.walkthrough_config import ClusteringConfig
from folio_core.data.csv_loader import load_csv
from folio_core.ml.kmeans import KMeans, inertia_curve


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Cluster the rows of a CSV table with k-means",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("input", help="Input CSV file")
    parser.add_argument("--config", "-c", default=None, help="YAML clustering config")
    parser.add_argument("--k", type=int, default=3, help="Number of clusters (default: 3)")
    parser.add_argument(
        "--features",
        nargs="+",
        default=[],
        help="Numeric feature columns (default: all numeric columns)"
    )
    parser.add_argument("--no-standardize", action="store_true", help="Cluster raw feature values")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--elbow",
        type=int,
        default=None,
        metavar="MAX_K",
        help="Print inertia for k = 1..MAX_K and exit"
    )
    parser.add_argument(
        "--clean-mortgage",
        action="store_true",
        help="Run the mortgage clean-up pipeline before clustering"
    )
    parser.add_argument("--output", "-o", default=None, help="Write rows with a 'cluster' column to CSV")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print detailed output")
    return parser.parse_args(argv)


def build_config(args) -> ClusteringConfig:
    if args.config:
        with open(args.config, "r") as f:
            data = yaml.safe_load(f) or {}
        return ClusteringConfig(**data)
    return ClusteringConfig(
        n_clusters=args.k,
        features=args.features,
        standardize=not args.no_standardize,
        random_state=args.seed,
    )


def select_features(df: pd.DataFrame, features) -> pd.DataFrame:
    """
    Pick the feature columns and drop rows with missing values.

    Raises:
        ValueError: If a requested column is missing or not numeric, or
            no numeric columns are available
    """
    if features:
        missing = [c for c in features if c not in df.columns]
        if missing:
            raise ValueError(f"Feature columns not found: {missing}")
        non_numeric = [c for c in features if not pd.api.types.is_numeric_dtype(df[c])]
        if non_numeric:
            raise ValueError(f"Feature columns must be numeric: {non_numeric}")
        selected = df[list(features)]
    else:
        selected = df.select_dtypes("number")
        if selected.empty:
            raise ValueError("No numeric columns to cluster on")

    return selected.dropna()


def standardize(X: pd.DataFrame) -> pd.DataFrame:
    std = X.std(ddof=0).replace(0, 1.0)
    return (X - X.mean()) / std


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        config = build_config(args)
        df = load_csv(args.input)
        if args.clean_mortgage:
            df = clean_mortgage_records(df, duplicate_action="drop")

        features = select_features(df, config.features)
        X = standardize(features) if config.standardize else features
        print(f"\nClustering {len(X)} rows on {list(X.columns)}")

        if args.elbow:
            curve = inertia_curve(X, range(1, min(args.elbow, len(X)) + 1), random_state=config.random_state)
            print("\n  k   inertia")
            for k, inertia in curve.items():
                print(f"  {k:<3} {inertia:,.2f}")
            return 0

        model = KMeans(n_clusters=config.n_clusters, random_state=config.random_state).fit(X)
        labeled = features.assign(cluster=model.labels_)

        print(f"\nInertia: {model.inertia_:,.2f} ({model.n_iter_} iterations)")
        print("\nCluster sizes:")
        print(labeled["cluster"].value_counts().sort_index().to_string())
        print("\nCluster means:")
        print(labeled.groupby("cluster").mean().to_string())

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            df.loc[labeled.index].assign(cluster=model.labels_).to_csv(output_path, index=False)
            print(f"\n✓ Saved to {output_path}")
        return 0

    except FileNotFoundError as e:
        print(f"\n✗ Error: File not found", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"\n✗ Error: Invalid parameter", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
