"""Simulation runner - Drive the epoch transition across a full run.

Key Features:
- Totals are recomputed fresh from the current validator set every epoch
- Randomness is injected (or built from a seed), never taken from global state
- Report rows form an append-only sequence, one per epoch
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config.schema import Config
from ..engine.randomness import RandomSource, make_rng
from ..engine.state import State
from ..engine.totals import EpochTotals
from .epoch import EpochReportRow, process_epoch

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Complete simulation result."""
    config: Config
    initial_totals: EpochTotals
    final_state: State
    rows: List[EpochReportRow] = field(default_factory=list)

    @property
    def final_totals(self) -> EpochTotals:
        return self.final_state.totals()

    @property
    def cumulative_penalties(self) -> int:
        return sum(row.head_ffg_penalty for row in self.rows)

    @property
    def cumulative_net_reward(self) -> int:
        return sum(row.net_reward for row in self.rows)


def run_simulation(
    state: State,
    config: Config,
    rng: RandomSource,
    epochs: Optional[int] = None,
) -> Tuple[State, List[EpochReportRow]]:
    """
    Fold the epoch transition over `epochs` epochs.

    Args:
        state: Starting validator set
        config: Simulation configuration
        rng: Randomness source
        epochs: Number of epochs (defaults to config.epochs); 0 returns state unchanged

    Returns:
        (final state, report rows)
    """
    if epochs is None:
        epochs = config.epochs
    if epochs < 0:
        raise ValueError(f"epochs must be non-negative, got {epochs}")

    rows: List[EpochReportRow] = []
    for epoch_id in range(epochs):
        totals = state.totals()
        state, row = process_epoch(state, totals, epoch_id, config, rng)
        rows.append(row)

    return state, rows


class SimulationRunner:
    """Main simulation runner."""

    def __init__(self, config: Config, initial_state: Optional[State] = None):
        """
        Initialize simulation runner.

        Args:
            config: Simulation configuration
            initial_state: Starting validator set (defaults to State.initial(config))

        Raises:
            ValueError: If an effective balance in initial_state is above the cap or off the increment grid
        """
        self.config = config
        if initial_state is None:
            initial_state = State.initial(config)
        else:
            initial_state.validate_effective_balances()
        self.initial_state = initial_state

    def run(
        self,
        random_seed: int = None,
        rng: RandomSource = None,
        epochs: int = None,
    ) -> SimulationResult:
        """
        Run the simulation.

        Args:
            random_seed: Random seed for reproducibility (defaults to config value)
            rng: Explicit randomness source; takes precedence over random_seed
            epochs: Number of epochs (defaults to config value)

        Returns:
            Simulation result
        """
        if rng is None:
            seed = random_seed if random_seed is not None else self.config.random_seed
            rng = make_rng(seed)

        initial_totals = self.initial_state.totals()
        logger.info(
            f"Starting simulation: {len(self.initial_state)} validators, "
            f"{epochs if epochs is not None else self.config.epochs} epochs, "
            f"config {self.config.compute_hash()}"
        )

        final_state, rows = run_simulation(self.initial_state, self.config, rng, epochs)

        result = SimulationResult(
            config=self.config,
            initial_totals=initial_totals,
            final_state=final_state,
            rows=rows,
        )
        logger.info(
            f"Simulation finished: staked {initial_totals.staked_balance} -> "
            f"{result.final_totals.staked_balance}"
        )
        return result
