"""Results display component."""

import streamlit as st

from app.utils.charts import (
    create_drawdown_chart,
    create_equity_curve_chart,
    create_price_chart,
    create_rsi_chart,
)
from app.utils.formatters import (
    format_date,
    format_metrics_table,
    format_percentage,
    format_ratio,
)
from folio_core.backtest.engine import BacktestResult
from folio_core.indicators.technical import add_indicators
from folio_core.metrics.performance import calculate_drawdown_series


def render_error(error_msg: str) -> None:
    """Render error message with suggestions."""
    if "No data returned" in error_msg:
        st.error("❌ **Invalid Ticker Symbol**")
        st.markdown(f"**Error:** {error_msg}")
        st.info("""
        💡 **Suggestions:**
        - Verify the ticker symbol is correct (e.g., 'SPY', 'QQQ', 'AAPL')
        - Or pick a CSV from data/prices instead
        """)

    elif "Failed to fetch data" in error_msg:
        st.error("❌ **Data Download Failed**")
        st.markdown(f"**Error:** {error_msg}")
        st.info("""
        💡 **Suggestions:**
        - Check your internet connection
        - Try again later or use a local CSV
        """)

    elif "No data for" in error_msg and "date range" in error_msg:
        st.error("❌ **No Data Available for Date Range**")
        st.markdown(f"**Error:** {error_msg}")
        st.info("💡 **Suggestion:** Pick dates inside the available range shown above")

    elif "Need more than" in error_msg:
        st.error("❌ **Not Enough History**")
        st.markdown(f"**Error:** {error_msg}")
        st.info("💡 **Suggestion:** Widen the date range or shorten the strategy windows")

    else:
        st.error(f"❌ **Backtest Failed**\n\n{error_msg}")
        st.info("👈 Adjust parameters in the sidebar and try again")

    with st.expander("🔍 Full Error Details", expanded=False):
        st.code(error_msg)


def render_backtest(result: BacktestResult, ohlcv, title: str) -> None:
    """Render headline metrics, charts and tables for one backtest."""
    metrics = result.metrics

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Return", format_percentage(metrics["total_return"]))
    col2.metric("CAGR", format_percentage(metrics["cagr"]))
    col3.metric("Sharpe Ratio", format_ratio(metrics["sharpe_ratio"]))
    col4.metric("Max Drawdown", format_percentage(metrics["max_drawdown_pct"]))

    st.plotly_chart(
        create_equity_curve_chart(result.equity_curve, result.benchmark_equity, title=title),
        use_container_width=True,
    )
    st.plotly_chart(
        create_drawdown_chart(calculate_drawdown_series(result.equity_curve)),
        use_container_width=True,
    )

    with st.expander("📈 Price and indicators", expanded=False):
        enriched = add_indicators(ohlcv)
        overlays = [c for c in enriched.columns if c.startswith("sma_") or c in ("bb_upper", "bb_lower")]
        st.plotly_chart(create_price_chart(enriched, overlays), use_container_width=True)
        st.plotly_chart(create_rsi_chart(enriched["rsi"]), use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.markdown("**Metrics**")
        st.dataframe(format_metrics_table(metrics), hide_index=True, use_container_width=True)
        st.caption(
            f"Peak {format_date(metrics.get('peak_date'))} → "
            f"trough {format_date(metrics.get('trough_date'))}"
        )
    with right:
        st.markdown("**Yearly summary**")
        st.dataframe(metrics["yearly_summary"], use_container_width=True)

    with st.expander(f"🔁 Trades ({len(result.trades)})", expanded=False):
        st.dataframe(result.trades, hide_index=True, use_container_width=True)

    st.download_button(
        "Download results (CSV)",
        data=result.to_frame().to_csv().encode("utf-8"),
        file_name=f"{result.strategy_name}_results.csv",
        mime="text/csv",
    )
