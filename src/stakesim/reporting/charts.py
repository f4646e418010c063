"""Chart generation using Plotly."""

from typing import List

import plotly.graph_objects as go

from ..simulation.epoch import EpochReportRow

BASE_UNITS_PER_STAKE_UNIT = 1_000_000_000

# Dark theme palette
THEME = {
    "text": "#e8eaed",
    "text_secondary": "#9aa0a6",
    "grid": "rgba(30, 33, 36, 0.8)",
    "background": "rgba(8, 9, 10, 1)",
    "cyan": "#00d4ff",
    "cyan_fill": "rgba(0, 212, 255, 0.12)",
    "amber": "#ffab00",
    "red": "#ff5252",
    "green": "#00e676",
}

AXIS_STYLE = dict(
    gridcolor=THEME["grid"],
    zerolinecolor=THEME["grid"],
    tickfont=dict(size=10, family="SF Mono, Consolas, monospace"),
    title_font=dict(size=10, color=THEME["text_secondary"])
)


def apply_dark_layout(fig: go.Figure, title: str, x_title: str, y_title: str, showlegend: bool = True) -> None:
    """Apply the dark theme shared by every epoch chart."""
    fig.update_layout(
        title={"text": title, "x": 0, "xanchor": "left", "font": {"size": 11, "color": THEME["text_secondary"]}},
        xaxis_title=x_title,
        yaxis_title=y_title,
        hovermode="x unified",
        template="plotly_dark",
        height=340,
        margin=dict(l=50, r=20, t=40, b=40),
        showlegend=showlegend,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0, bgcolor="rgba(0,0,0,0)"),
        plot_bgcolor=THEME["background"],
        paper_bgcolor=THEME["background"],
        font={"color": THEME["text"], "family": "Inter, -apple-system, sans-serif", "size": 11},
        xaxis=AXIS_STYLE,
        yaxis=AXIS_STYLE
    )


def create_balance_chart(rows: List[EpochReportRow]) -> go.Figure:
    """Create staked/active balance per epoch chart."""
    epochs = [r.epoch for r in rows]

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=epochs,
        y=[r.staked_balance / BASE_UNITS_PER_STAKE_UNIT for r in rows],
        name='Staked',
        mode='lines',
        line=dict(color=THEME["cyan"], width=2),
        fill='tozeroy',
        fillcolor=THEME["cyan_fill"]
    ))

    fig.add_trace(go.Scatter(
        x=epochs,
        y=[r.active_balance / BASE_UNITS_PER_STAKE_UNIT for r in rows],
        name='Active (effective)',
        mode='lines',
        line=dict(color=THEME["amber"], width=2, dash='dot')
    ))
    apply_dark_layout(fig, "Stake Over Time", "Epoch", "Stake units")

    return fig


def create_deltas_chart(rows: List[EpochReportRow]) -> go.Figure:
    """Create per-epoch reward/penalty breakdown chart."""
    epochs = [r.epoch for r in rows]

    fig = go.Figure()

    fig.add_trace(go.Bar(x=epochs, y=[r.head_ffg_reward for r in rows], name='FFG Reward', marker_color=THEME["cyan"]))
    fig.add_trace(go.Bar(x=epochs, y=[r.attester_reward for r in rows], name='Attester', marker_color=THEME["green"]))
    fig.add_trace(go.Bar(x=epochs, y=[r.proposer_reward for r in rows], name='Proposer', marker_color=THEME["amber"]))
    fig.add_trace(go.Bar(x=epochs, y=[-r.head_ffg_penalty for r in rows], name='Penalty', marker_color=THEME["red"]))

    fig.update_layout(barmode='relative')

    # Zero line for reference
    fig.add_hline(y=0, line_dash="solid", line_color=THEME["text_secondary"], line_width=1, opacity=0.5)

    apply_dark_layout(fig, "Rewards and Penalties", "Epoch", "Base units")

    return fig
