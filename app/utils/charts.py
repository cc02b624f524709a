"""Plotly chart utilities for the Streamlit app."""

import plotly.graph_objects as go
import pandas as pd
import numpy as np
from typing import Dict, List, Optional

PALETTE = [
    '#2E86AB',  # Blue
    '#A23B72',  # Purple
    '#F18F01',  # Orange
    '#C73E1D',  # Red
    '#6A994E',  # Green
    '#BC4B51',  # Dark Red
    '#4EA8DE',  # Light Blue
    '#5E548E',  # Dark Purple
    '#F4A261',  # Peach
    '#2A9D8F',  # Teal
]


def _axis(title: str, **extra) -> dict:
    axis = dict(
        title=dict(text=title, font=dict(color="#374151", size=12)),
        tickfont=dict(color="#374151", size=11),
        showgrid=True,
        gridcolor='#e5e7eb',
        showline=True,
        linecolor='#9ca3af',
        linewidth=1,
    )
    axis.update(extra)
    return axis


def _apply_layout(fig: go.Figure, title: str, x_title: str, y_title: str, height: int, **yaxis_extra) -> None:
    fig.update_layout(
        title=dict(
            text=title,
            font=dict(size=20, color='#1f2937'),
            xanchor="center",
            x=0.5,
        ),
        xaxis=_axis(x_title),
        yaxis=_axis(y_title, **yaxis_extra),
        hovermode='x unified',
        plot_bgcolor='white',
        paper_bgcolor='white',
        height=height,
        margin=dict(l=60, r=30, t=60, b=60),
        font=dict(family='Inter, system-ui, sans-serif', size=12),
        legend=dict(
            font=dict(color="#374151", size=10),
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1,
            bgcolor="rgba(255, 255, 255, 0.8)",
        ),
    )


def _add_range_selector(fig: go.Figure) -> None:
    fig.update_xaxes(
        rangeselector=dict(
            buttons=list([
                dict(count=1, label="1M", step="month", stepmode="backward"),
                dict(count=6, label="6M", step="month", stepmode="backward"),
                dict(count=1, label="YTD", step="year", stepmode="todate"),
                dict(count=1, label="1Y", step="year", stepmode="backward"),
                dict(count=5, label="5Y", step="year", stepmode="backward"),
                dict(label="ALL", step="all")
            ]),
            bgcolor='#9ca3af',
            activecolor='#2E86AB',
        ),
        rangeslider=dict(visible=False)
    )


def empty_figure(message: str, title: str = "", height: int = 400) -> go.Figure:
    """Placeholder figure with a centered message."""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False,
        font=dict(size=16, color="#9ca3af")
    )
    fig.update_layout(
        title=title,
        height=height,
        plot_bgcolor='white',
        paper_bgcolor='white',
    )
    return fig


def create_price_chart(
    ohlcv: pd.DataFrame,
    overlays: Optional[List[str]] = None,
    title: str = "Price",
    height: int = 500,
) -> go.Figure:
    """
    Create a close-price line chart with optional indicator overlays.

    Args:
        ohlcv: DataFrame with a 'close' column and DatetimeIndex
        overlays: Extra columns of ohlcv to draw on the price axis
                 (e.g. ['sma_50', 'sma_200', 'bb_upper', 'bb_lower'])
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly figure
    """
    if ohlcv is None or ohlcv.empty or 'close' not in ohlcv.columns:
        return empty_figure("No price data available", title, height)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=ohlcv.index,
        y=ohlcv['close'].values,
        mode='lines',
        name='Close',
        line=dict(color='#1f2937', width=1.5),
        hovertemplate='<b>Close:</b> %{y:.2f}<extra></extra>',
    ))

    for i, column in enumerate(overlays or []):
        if column not in ohlcv.columns:
            continue
        dashed = column.startswith('bb_')
        fig.add_trace(go.Scatter(
            x=ohlcv.index,
            y=ohlcv[column].values,
            mode='lines',
            name=column,
            line=dict(
                color=PALETTE[i % len(PALETTE)],
                width=1,
                dash='dot' if dashed else 'solid',
            ),
            hovertemplate=f'<b>{column}:</b> %{{y:.2f}}<extra></extra>',
        ))

    _apply_layout(fig, title, "Date", "Price", height)
    _add_range_selector(fig)
    return fig


def create_rsi_chart(
    rsi: pd.Series,
    lower: float = 30.0,
    upper: float = 70.0,
    title: str = "RSI",
    height: int = 250,
) -> go.Figure:
    """RSI line with oversold/overbought bands."""
    if rsi is None or rsi.dropna().empty:
        return empty_figure("No RSI data available", title, height)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=rsi.index,
        y=rsi.values,
        mode='lines',
        name='RSI',
        line=dict(color='#5E548E', width=1.5),
        hovertemplate='<b>RSI:</b> %{y:.1f}<extra></extra>',
    ))
    for level, color in ((lower, '#6A994E'), (upper, '#C73E1D')):
        fig.add_hline(y=level, line=dict(color=color, width=1, dash='dash'))

    _apply_layout(fig, title, "Date", "RSI", height, range=[0, 100])
    return fig


def create_equity_curve_chart(
    equity_curve: pd.Series,
    benchmark: Optional[pd.Series] = None,
    title: str = "Equity Curve",
    height: int = 500,
) -> go.Figure:
    """
    Create an equity curve chart, optionally against buy-and-hold.

    Args:
        equity_curve: Strategy equity (starts at 1.0)
        benchmark: Buy-and-hold equity on the same index
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly figure
    """
    if equity_curve is None or equity_curve.empty:
        return empty_figure("No equity data available", title, height)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=equity_curve.index,
        y=equity_curve.values,
        mode='lines',
        name='Strategy',
        line=dict(color='#2E86AB', width=2),
        hovertemplate=(
            '<b>Date:</b> %{x|%Y-%m-%d}<br>'
            '<b>Strategy:</b> %{y:.3f}<br>'
            '<extra></extra>'
        ),
    ))

    if benchmark is not None and not benchmark.empty:
        fig.add_trace(go.Scatter(
            x=benchmark.index,
            y=benchmark.values,
            mode='lines',
            name='Buy & Hold',
            line=dict(color='#9ca3af', width=1.5, dash='dash'),
            hovertemplate='<b>Buy & Hold:</b> %{y:.3f}<extra></extra>',
        ))

    _apply_layout(fig, title, "Date", "Growth of $1", height)
    _add_range_selector(fig)
    return fig


def create_drawdown_chart(
    drawdown: pd.Series,
    title: str = "Drawdown",
    height: int = 300,
) -> go.Figure:
    """
    Create a filled drawdown chart.

    Args:
        drawdown: Drawdown series as negative decimals (e.g. -0.2 for -20%)
    """
    if drawdown is None or drawdown.empty:
        return empty_figure("No drawdown data available", title, height)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=drawdown.index,
        y=drawdown.values * 100,
        mode='lines',
        name='Drawdown',
        fill='tozeroy',
        line=dict(color='#DC2626', width=1.5),
        fillcolor='rgba(220, 38, 38, 0.2)',
        hovertemplate=(
            '<b>Date:</b> %{x|%Y-%m-%d}<br>'
            '<b>Drawdown:</b> %{y:.2f}%<br>'
            '<extra></extra>'
        ),
    ))

    _apply_layout(
        fig, title, "Date", "Drawdown (%)", height,
        zeroline=True, zerolinecolor='#9ca3af', zerolinewidth=2,
    )
    return fig


def create_cluster_scatter(
    data: pd.DataFrame,
    x: str,
    y: str,
    labels,
    centers: Optional[pd.DataFrame] = None,
    title: str = "Clusters",
    height: int = 500,
) -> go.Figure:
    """
    Scatter two feature columns colored by cluster label.

    Args:
        data: Feature table
        x: Column for the x axis
        y: Column for the y axis
        labels: Cluster label per row of data
        centers: Optional cluster centers with columns x and y
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly figure
    """
    if data is None or data.empty:
        return empty_figure("No data to cluster", title, height)
    for column in (x, y):
        if column not in data.columns:
            raise ValueError(f"Column '{column}' not in data")

    labels = np.asarray(labels)
    if len(labels) != len(data):
        raise ValueError(f"Got {len(labels)} labels for {len(data)} rows")

    fig = go.Figure()
    for i, cluster in enumerate(np.unique(labels)):
        mask = labels == cluster
        fig.add_trace(go.Scatter(
            x=data.loc[mask, x],
            y=data.loc[mask, y],
            mode='markers',
            name=f"Cluster {cluster}",
            marker=dict(color=PALETTE[i % len(PALETTE)], size=7, opacity=0.75),
        ))

    if centers is not None and not centers.empty:
        fig.add_trace(go.Scatter(
            x=centers[x],
            y=centers[y],
            mode='markers',
            name='Centers',
            marker=dict(color='#1f2937', size=14, symbol='x'),
        ))

    _apply_layout(fig, title, x, y, height)
    fig.update_layout(hovermode='closest')
    return fig


def create_elbow_chart(
    inertias: Dict[int, float],
    title: str = "Elbow Method",
    height: int = 350,
) -> go.Figure:
    """Inertia against number of clusters."""
    if not inertias:
        return empty_figure("No inertia values", title, height)

    ks = sorted(inertias)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=ks,
        y=[inertias[k] for k in ks],
        mode='lines+markers',
        name='Inertia',
        line=dict(color='#2E86AB', width=2),
        marker=dict(size=8),
        hovertemplate='<b>k:</b> %{x}<br><b>Inertia:</b> %{y:.2f}<extra></extra>',
    ))
    _apply_layout(fig, title, "Number of clusters (k)", "Inertia", height)
    fig.update_layout(hovermode='closest', showlegend=False)
    return fig
