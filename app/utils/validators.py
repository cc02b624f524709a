"""Input validation utilities."""

from datetime import date

from app.config.defaults import EARLIEST_START_DATE
from folio_core.data.prices import is_ticker


def validate_source_widget(source, available_csvs):
    """
    Validate the price source selection.

    Args:
        source: Ticker symbol or CSV name chosen in the sidebar
        available_csvs: Names of price CSVs under data/prices

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    if not source or not str(source).strip():
        errors.append("Price source cannot be empty")
        return errors

    source = str(source).strip()
    if source.lower().endswith(".csv"):
        if source not in available_csvs:
            errors.append(f"CSV not found in data/prices: {source}")
    elif not is_ticker(source):
        errors.append(f"Invalid ticker: {source}")

    return errors


def validate_date_range_widget(start_date, end_date):
    """
    Validate date range.

    Args:
        start_date: Start date
        end_date: End date

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    # Check for None values (e.g. cleared inputs)
    if start_date is None or end_date is None:
        errors.append("Start date and end date are required")
        return errors

    if start_date >= end_date:
        errors.append(f"Start date ({start_date}) must be before end date ({end_date})")

    if start_date < EARLIEST_START_DATE:
        errors.append(f"Start date should be on or after {EARLIEST_START_DATE}")

    if end_date > date.today():
        errors.append(f"End date ({end_date}) cannot be in the future")

    return errors


def validate_execution_widget(cost_bps, execution_delay):
    errors = []
    if cost_bps < 0:
        errors.append(f"Transaction cost must be >= 0 bps, got {cost_bps}")
    if execution_delay < 1:
        errors.append(
            f"Execution delay must be at least 1 bar, got {execution_delay}"
        )
    return errors


def validate_clustering_widget(features, n_clusters, n_rows):
    """
    Validate clustering inputs.

    Args:
        features: Selected numeric feature columns
        n_clusters: Requested number of clusters
        n_rows: Rows in the uploaded table

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if len(features) < 1:
        errors.append("Select at least one feature column")
    if n_clusters > n_rows:
        errors.append(f"Number of clusters ({n_clusters}) cannot exceed rows ({n_rows})")
    return errors


def validate_backtest_params(source, available_csvs, start_date, end_date, cost_bps, execution_delay):
    """
    Validate all backtest parameters before execution.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    errors.extend(validate_source_widget(source, available_csvs))
    errors.extend(validate_date_range_widget(start_date, end_date))
    errors.extend(validate_execution_widget(cost_bps, execution_delay))
    return errors
