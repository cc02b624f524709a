"""Streamlit Walkthrough App - Main Entry Point."""

import streamlit as st
import sys
import logging
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.components.header import render_header
from app.components import clustering, results
from app.config.defaults import (
    BOUNDS,
    DEFAULT_COST,
    DEFAULT_DELAY,
    DEFAULT_END_DATE,
    DEFAULT_START_DATE,
    DEFAULT_STRATEGY,
    DEFAULT_TICKER,
)
from app.strategy_ui import STRATEGY_SPECS
from app.utils.validators import validate_backtest_params
from folio_core.backtest.engine import run_backtest
from folio_core.data.prices import load_prices
from folio_core.strategies import get_strategy
from folio_core.utils import paths

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title="Folio Walkthroughs",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)


def _render_sidebar():
    st.sidebar.header("📊 Data")
    available_csvs = [f"{symbol}.csv" for symbol in paths.list_price_symbols()]
    source_kind = st.sidebar.radio(
        "Price source",
        options=["Ticker (yfinance)", "Local CSV"],
        index=1 if available_csvs else 0,
        key="source_kind",
    )
    if source_kind == "Local CSV" and available_csvs:
        source = st.sidebar.selectbox("CSV file", options=available_csvs, key="source_csv")
    else:
        source = st.sidebar.text_input("Ticker", value=DEFAULT_TICKER, key="source_ticker").strip().upper()

    start_date = st.sidebar.date_input("Start date", value=DEFAULT_START_DATE, key="start_date")
    end_date = st.sidebar.date_input("End date", value=DEFAULT_END_DATE, key="end_date")

    st.sidebar.header("🧠 Strategy")
    names = list(STRATEGY_SPECS)
    strategy_name = st.sidebar.selectbox(
        "Strategy",
        options=names,
        index=names.index(DEFAULT_STRATEGY),
        format_func=lambda name: STRATEGY_SPECS[name].display_name,
        key="strategy_name",
    )
    spec = STRATEGY_SPECS[strategy_name]
    st.sidebar.caption(spec.description)
    with st.sidebar.expander("Parameters", expanded=False):
        params = spec.render_params(f"{strategy_name}_")

    st.sidebar.header("⚙️ Execution")
    cost_bps = st.sidebar.slider(
        "Transaction cost (bps)",
        min_value=BOUNDS["cost_bps"][0],
        max_value=BOUNDS["cost_bps"][1],
        value=float(DEFAULT_COST),
        step=0.5,
        key="cost_bps",
    )
    execution_delay = st.sidebar.slider(
        "Execution delay (bars)",
        min_value=BOUNDS["execution_delay"][0],
        max_value=BOUNDS["execution_delay"][1],
        value=DEFAULT_DELAY,
        help="Signals decided at the close of bar t are traded from bar t + delay",
        key="execution_delay",
    )

    errors = validate_backtest_params(
        source, available_csvs, start_date, end_date, cost_bps, execution_delay
    )
    for error in errors:
        st.sidebar.error(error)

    run_clicked = st.sidebar.button(
        "Run backtest", type="primary", disabled=bool(errors), use_container_width=True
    )

    return {
        "source": source,
        "start_date": start_date,
        "end_date": end_date,
        "strategy_name": strategy_name,
        "params": params,
        "cost_bps": cost_bps,
        "execution_delay": execution_delay,
        "run_clicked": run_clicked and not errors,
    }


def main():
    render_header(
        "Folio Walkthroughs",
        "Reproduce the blog's strategy backtests and clustering examples",
    )

    if "backtest" not in st.session_state:
        st.session_state.backtest = None

    config = _render_sidebar()

    if config["run_clicked"]:
        source = config["source"]
        if source.lower().endswith(".csv"):
            source = str(paths.PRICES_DATA_DIR / source)

        with st.spinner("Running backtest..."):
            try:
                ohlcv = load_prices(
                    source,
                    config["start_date"].strftime("%Y-%m-%d"),
                    config["end_date"].strftime("%Y-%m-%d"),
                )
                strategy = get_strategy(config["strategy_name"], config["params"])
                result = run_backtest(
                    ohlcv,
                    strategy,
                    cost_bps=config["cost_bps"],
                    execution_delay=config["execution_delay"],
                )
                st.session_state.backtest = {
                    "result": result,
                    "ohlcv": ohlcv,
                    "title": f"{strategy.name} on {config['source']}",
                    "error": None,
                }
            except (ValueError, RuntimeError, FileNotFoundError) as e:
                logger.error(f"Backtest failed: {e}", exc_info=True)
                st.session_state.backtest = {"error": str(e)}

    tab_backtest, tab_cluster = st.tabs(["Strategy backtest", "Clustering"])

    with tab_backtest:
        state = st.session_state.backtest
        if state is None:
            st.info("👈 Choose a price source and strategy, then click **Run backtest**.")
        elif state["error"]:
            results.render_error(state["error"])
        else:
            results.render_backtest(state["result"], state["ohlcv"], state["title"])

    with tab_cluster:
        clustering.render()

    st.markdown("---")
    st.caption("Folio Walkthroughs | Streamlit companion app")


if __name__ == "__main__":
    main()
