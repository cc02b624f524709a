"""
Generate sample data for the walkthroughs.

Writes Yahoo-style price CSVs (Date, Open, High, Low, Close, Adj Close,
Volume) to data/prices/ using geometric Brownian motion, plus a small
mortgage table with messy values and duplicate loan ids to data/raw/ for
the cleaning and clustering examples.

Usage:
    python scripts/generate_sample_data.py
    python scripts/generate_sample_data.py --symbols SPY QQQ --start-date 2010-01-01
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from folio_core.utils import paths

# Symbol-specific parameters for variety
SYMBOL_PARAMS = {
    "SPY": {"annual_vol": 0.16, "annual_drift": 0.10, "initial_price": 200.0},
    "QQQ": {"annual_vol": 0.20, "annual_drift": 0.12, "initial_price": 250.0},
    "IWM": {"annual_vol": 0.22, "annual_drift": 0.08, "initial_price": 150.0},
    "TLT": {"annual_vol": 0.14, "annual_drift": 0.03, "initial_price": 120.0},
    "GLD": {"annual_vol": 0.15, "annual_drift": 0.05, "initial_price": 130.0},
}


def generate_ohlcv_data(
    start_date: str,
    end_date: str,
    initial_price: float = 100.0,
    annual_vol: float = 0.20,
    annual_drift: float = 0.08,
    seed: int = None,
) -> pd.DataFrame:
    """
    Generate realistic OHLCV data using geometric Brownian motion.

    Args:
        start_date: Start date (YYYY-MM-DD)
        end_date: End date (YYYY-MM-DD)
        initial_price: Starting price
        annual_vol: Annualized volatility (e.g., 0.20 = 20%)
        annual_drift: Annualized drift (e.g., 0.08 = 8%)
        seed: Random seed for reproducibility

    Returns:
        DataFrame with Yahoo-style columns and a Date column
    """
    rng = np.random.default_rng(seed)

    dates = pd.bdate_range(start=start_date, end=end_date)
    n_days = len(dates)

    daily_vol = annual_vol / np.sqrt(252)
    daily_drift = annual_drift / 252

    returns = rng.normal(daily_drift, daily_vol, size=n_days)
    close_prices = initial_price * np.exp(np.cumsum(returns))

    # High/Low are close +/- a random intraday range
    intraday_range = rng.uniform(0.005, 0.02, size=n_days)
    high_prices = close_prices * (1 + intraday_range * rng.uniform(0.3, 1.0, size=n_days))
    low_prices = close_prices * (1 - intraday_range * rng.uniform(0.3, 1.0, size=n_days))

    open_prices = np.empty(n_days)
    open_prices[0] = initial_price
    open_prices[1:] = close_prices[:-1] * (1 + rng.normal(0, daily_vol * 0.5, size=n_days - 1))

    high_prices = np.maximum(high_prices, np.maximum(open_prices, close_prices))
    low_prices = np.minimum(low_prices, np.minimum(open_prices, close_prices))

    volume = rng.lognormal(mean=np.log(1_000_000), sigma=0.5, size=n_days).astype(int)

    return pd.DataFrame({
        'Date': dates.strftime("%Y-%m-%d"),
        'Open': open_prices.round(4),
        'High': high_prices.round(4),
        'Low': low_prices.round(4),
        'Close': close_prices.round(4),
        'Adj Close': close_prices.round(4),
        'Volume': volume,
    })


def generate_mortgage_records(n_rows: int = 200, seed: int = 7) -> pd.DataFrame:
    """
    Generate a messy mortgage table.

    Amounts carry '$' and ',' formatting, rates carry '%', a few values are
    blank, and a handful of loan ids are repeated.
    """
    rng = np.random.default_rng(seed)

    loan_amount = rng.lognormal(np.log(250_000), 0.4, size=n_rows)
    income = loan_amount / rng.uniform(2.5, 5.0, size=n_rows)
    property_value = loan_amount / rng.uniform(0.6, 0.95, size=n_rows)
    interest_rate = rng.uniform(2.5, 7.5, size=n_rows)
    origination = pd.Timestamp("2015-01-01") + pd.to_timedelta(
        rng.integers(0, 3000, size=n_rows), unit="D"
    )

    df = pd.DataFrame({
        "Loan ID": [f"L{i:05d}" for i in range(n_rows)],
        "LoanAmount": [f"${v:,.0f}" for v in loan_amount],
        "Interest Rate": [f"{v:.2f}%" for v in interest_rate],
        "Property Value": property_value.round(0),
        "Income": income.round(0),
        "Origination Date": origination.strftime("%Y-%m-%d"),
        "State": rng.choice(["CA", "TX", "NY", "FL", "WA"], size=n_rows),
    })

    blanks = rng.choice(n_rows, size=max(1, n_rows // 20), replace=False)
    df.loc[blanks, "Income"] = np.nan

    dupes = df.sample(n=max(1, n_rows // 40), random_state=seed)
    return pd.concat([df, dupes], ignore_index=True)


def parse_arguments():
    parser = argparse.ArgumentParser(description="Generate sample walkthrough data")
    parser.add_argument(
        "--symbols",
        nargs="+",
        default=list(SYMBOL_PARAMS),
        help=f"Symbols to generate (default: {' '.join(SYMBOL_PARAMS)})"
    )
    parser.add_argument("--start-date", default="2005-01-01", help="Start date (default: 2005-01-01)")
    parser.add_argument("--end-date", default="2020-12-31", help="End date (default: 2020-12-31)")
    parser.add_argument(
        "--skip-mortgage",
        action="store_true",
        help="Do not write the sample mortgage table"
    )
    return parser.parse_args()


def main():
    """Generate sample data for the requested symbols."""
    args = parse_arguments()

    print("Generating sample market data...")
    print(f"Symbols: {args.symbols}")
    print(f"Date range: {args.start_date} to {args.end_date}")

    paths.ensure_dir(paths.PRICES_DATA_DIR)

    for i, symbol in enumerate(args.symbols):
        params = SYMBOL_PARAMS.get(symbol.upper(), {
            "annual_vol": 0.20,
            "annual_drift": 0.08,
            "initial_price": 100.0
        })

        print(f"  Generating {symbol}... ", end="")
        df = generate_ohlcv_data(args.start_date, args.end_date, seed=42 + i, **params)

        output_path = paths.get_price_csv_path(symbol)
        df.to_csv(output_path, index=False)

        print(f"✓ ({len(df)} days, {df['Close'].iloc[0]:.2f} → {df['Close'].iloc[-1]:.2f})")

    if not args.skip_mortgage:
        paths.ensure_dir(paths.RAW_DATA_DIR)
        mortgage_path = paths.RAW_DATA_DIR / "mortgages.csv"
        generate_mortgage_records().to_csv(mortgage_path, index=False)
        print(f"  ✓ Mortgage sample: {mortgage_path}")

    print(f"\n✅ Generated data for {len(args.symbols)} symbols")
    print(f"📁 Saved to: {paths.PRICES_DATA_DIR}")


if __name__ == "__main__":
    main()
