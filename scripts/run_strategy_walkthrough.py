#!/usr/bin/env python
"""
Run a strategy walkthrough backtest from the command line.

Reproduces the backtests from the blog's trading posts on a local price CSV
or a yfinance ticker. Parameters come from the command line or a YAML run
config; results are printed and optionally saved to files.

Example Usage:
    Basic:
        python scripts/run_strategy_walkthrough.py \\
            --source SPY \\
            --start-date 2010-01-01 \\
            --end-date 2020-12-31

    With parameters:
        python scripts/run_strategy_walkthrough.py \\
            --source data/prices/SPY.csv \\
            --start-date 2010-01-01 \\
            --end-date 2020-12-31 \\
            --strategy meanrev \\
            --param rsi_period=10 --param zscore_lookback=40 \\
            --cost-bps 5 \\
            --output-dir results/meanrev_spy

    From a config file:
        python scripts/run_strategy_walkthrough.py --config configs/golden_cross.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from folio_core.backtest.engine import run_backtest
from folio_core.config.walkthrough_config import (
    BacktestConfig,
    DataConfig,
    StrategyConfig,
    WalkthroughConfig,
)
from folio_core.data.prices import load_prices
from folio_core.strategies import STRATEGY_REGISTRY, get_strategy
from folio_core.utils.constants import DEFAULT_COST_BPS, DEFAULT_EXECUTION_DELAY


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a strategy walkthrough backtest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="YAML run config (overrides the data/strategy arguments)"
    )

    data_group = parser.add_argument_group("Data")
    data_group.add_argument("--source", "-s", help="Price CSV path or ticker symbol")
    data_group.add_argument("--start-date", help="Start date in YYYY-MM-DD format")
    data_group.add_argument("--end-date", help="End date in YYYY-MM-DD format")

    strategy_group = parser.add_argument_group("Strategy")
    strategy_group.add_argument(
        "--strategy",
        choices=sorted(STRATEGY_REGISTRY),
        default="ma_cross",
        help="Strategy name (default: ma_cross)"
    )
    strategy_group.add_argument(
        "--param", "-p",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Strategy parameter override; VALUE is parsed as YAML (repeatable)"
    )

    exec_group = parser.add_argument_group("Execution")
    exec_group.add_argument(
        "--cost-bps",
        type=float,
        default=DEFAULT_COST_BPS,
        help=f"Transaction cost in basis points (default: {DEFAULT_COST_BPS})"
    )
    exec_group.add_argument(
        "--execution-delay",
        type=int,
        default=DEFAULT_EXECUTION_DELAY,
        help=f"Bars between signal and position (default: {DEFAULT_EXECUTION_DELAY})"
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--output-dir", "-o",
        type=str,
        default=None,
        help="Directory to save results (optional)"
    )
    output_group.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print detailed output"
    )

    return parser.parse_args(argv)


def parse_param_overrides(pairs):
    """
    Turn ["fast_window=20", "allow_short=true"] into a params dict.

    Values are parsed with YAML so numbers, booleans and lists keep their type.
    """
    params = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Parameter override must look like KEY=VALUE, got: {pair}")
        key, raw = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError(f"Parameter override has an empty key: {pair}")
        params[key] = yaml.safe_load(raw)
    return params


def build_config(args) -> WalkthroughConfig:
    """Build a WalkthroughConfig from a YAML file or the CLI arguments."""
    if args.config:
        return WalkthroughConfig.from_yaml(args.config)

    missing = [
        flag for flag, value in (
            ("--source", args.source),
            ("--start-date", args.start_date),
            ("--end-date", args.end_date),
        )
        if not value
    ]
    if missing:
        raise ValueError(f"Missing required arguments without --config: {', '.join(missing)}")

    return WalkthroughConfig(
        name=f"{args.strategy} on {args.source}",
        data=DataConfig(source=args.source, start_date=args.start_date, end_date=args.end_date),
        strategy=StrategyConfig(name=args.strategy, params=parse_param_overrides(args.param)),
        backtest=BacktestConfig(cost_bps=args.cost_bps, execution_delay=args.execution_delay),
    )


def display_results(result, config, verbose=False):
    """Display backtest results to console."""
    print("\n" + "=" * 60)
    print(f"WALKTHROUGH: {config.name}")
    print("=" * 60)

    print("\nConfiguration:")
    print(f"  Source: {config.data.source}")
    print(f"  Period: {config.data.start_date} to {config.data.end_date}")
    print(f"  Strategy: {result.strategy_name}")
    print(f"  Bars: {len(result.returns)}")

    metrics = result.metrics
    print("\nPerformance Metrics:")
    print(f"  Total Return: {metrics['total_return']:.2%}")
    print(f"  Buy & Hold: {result.benchmark_equity.iloc[-1] - 1:.2%}")
    print(f"  CAGR: {metrics['cagr']:.2%}")
    print(f"  Sharpe Ratio: {metrics['sharpe_ratio']:.2f}")
    print(f"  Max Drawdown: {metrics['max_drawdown_pct']:.2%}")
    print(f"  Volatility (Annual): {metrics['volatility']:.2%}")
    print(f"  Hit Rate: {metrics['hit_rate']:.2%}")
    print(f"  Exposure: {metrics['exposure']:.2%}")
    print(f"  Trades: {metrics['trade_count']}")

    if verbose:
        print("\nParameters:")
        for key, value in result.params.items():
            print(f"  {key}: {value}")

        print("\nDrawdown:")
        print(f"  Peak Date: {metrics.get('peak_date') or 'N/A'}")
        print(f"  Trough Date: {metrics.get('trough_date') or 'N/A'}")
        print(f"  Recovery Date: {metrics.get('recovery_date') or 'N/A'}")

        print("\nYearly Summary:")
        if not metrics['yearly_summary'].empty:
            print(metrics['yearly_summary'].to_string())

    print("\n" + "=" * 60)


def save_results(result, config, output_dir):
    """Save backtest results to files."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving results to {output_path}...")

    metadata = {
        "config": config.to_dict(),
        "strategy": result.strategy_name,
        "params": result.params,
        "metrics": {
            k: v if isinstance(v, (int, float)) or v is None else str(v)
            for k, v in result.summary().items()
        },
    }
    with open(output_path / "results.json", "w") as f:
        json.dump(metadata, f, indent=2, default=str)

    result.to_frame().to_csv(output_path / "timeseries.csv")
    result.trades.to_csv(output_path / "trades.csv", index=False)
    result.metrics['yearly_summary'].to_csv(output_path / "yearly_summary.csv")

    print(f"  ✓ results.json")
    print(f"  ✓ timeseries.csv")
    print(f"  ✓ trades.csv")
    print(f"  ✓ yearly_summary.csv")


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        config = build_config(args)

        print(f"\nRunning {config.strategy.name} on {config.data.source}...")
        print(f"Period: {config.data.start_date} to {config.data.end_date}")

        ohlcv = load_prices(config.data.source, config.data.start_date, config.data.end_date)
        strategy = get_strategy(config.strategy.name, config.strategy.params)
        result = run_backtest(
            ohlcv,
            strategy,
            cost_bps=config.backtest.cost_bps,
            execution_delay=config.backtest.execution_delay,
        )

        display_results(result, config, verbose=args.verbose)

        if args.output_dir:
            save_results(result, config, args.output_dir)

        print("\n✓ Walkthrough completed successfully!\n")
        return 0

    except FileNotFoundError as e:
        print(f"\n✗ Error: File not found", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"\n✗ Error: Invalid parameter", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    except RuntimeError as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
