"""Export functionality for CSV, JSON and console output."""

import json
from typing import List

import pandas as pd

from ..simulation.epoch import EpochReportRow
from ..simulation.runner import SimulationResult

REPORT_COLUMNS = [
    'epoch',
    'head_ffg_reward',
    'head_ffg_penalty',
    'proposer_reward',
    'attester_reward',
    'net_reward',
    'staked_balance',
    'active_balance',
    'max_balance',
    'min_balance',
    'validators',
    'active_validators',
]


def rows_to_dataframe(rows: List[EpochReportRow]) -> pd.DataFrame:
    """Convert report rows to a DataFrame, one row per epoch."""
    return pd.DataFrame([row.to_dict() for row in rows], columns=REPORT_COLUMNS)


def export_csv(result: SimulationResult, filepath: str):
    """Export simulation report rows to CSV."""
    df = rows_to_dataframe(result.rows)
    df.to_csv(filepath, index=False)


def export_json(result: SimulationResult, filepath: str):
    """Export simulation results to JSON."""
    final_totals = result.final_totals
    export_data = {
        'config': result.config.to_dict(),
        'config_hash': result.config.compute_hash(),
        'initial_staked_balance': result.initial_totals.staked_balance,
        'final_staked_balance': final_totals.staked_balance,
        'rows': [row.to_dict() for row in result.rows]
    }

    with open(filepath, 'w') as f:
        json.dump(export_data, f, indent=2)


def format_row(row: EpochReportRow) -> str:
    """Format one report row as a console line."""
    return (
        f"epoch {row.epoch:>6} | "
        f"ffg +{row.head_ffg_reward:,} -{row.head_ffg_penalty:,} | "
        f"proposer +{row.proposer_reward:,} | "
        f"attester +{row.attester_reward:,} | "
        f"staked {row.staked_balance:,} | "
        f"active {row.active_validators}/{row.validators} | "
        f"balance [{row.min_balance:,}, {row.max_balance:,}]"
    )
