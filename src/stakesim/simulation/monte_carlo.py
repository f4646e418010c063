"""Monte Carlo simulation for outcome dispersion across random seeds."""

from typing import Any, Dict, List

import numpy as np

from ..config.schema import Config
from .runner import SimulationResult, SimulationRunner


class MonteCarloRunner:
    """Repeat a simulation under different seeds."""

    def __init__(self, config: Config):
        """
        Initialize Monte Carlo runner.

        Args:
            config: Base configuration shared by every run
        """
        self.config = config

    def run(
        self,
        num_runs: int = 10,
        random_seed: int = None,
        epochs: int = None,
    ) -> List[SimulationResult]:
        """
        Run Monte Carlo simulation.

        Args:
            num_runs: Number of runs
            random_seed: Base seed; run i uses random_seed + i (defaults to config value, else 0)
            epochs: Epochs per run (defaults to config value)

        Returns:
            List of simulation results
        """
        if num_runs <= 0:
            raise ValueError(f"num_runs must be positive, got {num_runs}")

        if random_seed is None:
            random_seed = self.config.random_seed if self.config.random_seed is not None else 0

        runner = SimulationRunner(self.config)
        return [
            runner.run(random_seed=random_seed + run_idx, epochs=epochs)
            for run_idx in range(num_runs)
        ]

    def analyze_results(self, results: List[SimulationResult]) -> Dict[str, Any]:
        """
        Analyze Monte Carlo results.

        Args:
            results: List of simulation results

        Returns:
            Statistical analysis
        """
        if not results:
            return {}

        final_staked = [r.final_totals.staked_balance for r in results]
        final_min = [r.final_totals.min_balance for r in results]
        penalties = [r.cumulative_penalties for r in results]

        def compute_stats(values: List[float]) -> Dict[str, float]:
            """Compute statistical summary."""
            return {
                'mean': float(np.mean(values)),
                'std': float(np.std(values)),
                'min': float(np.min(values)),
                'max': float(np.max(values)),
                'p5': float(np.percentile(values, 5)),
                'p25': float(np.percentile(values, 25)),
                'p50': float(np.percentile(values, 50)),
                'p75': float(np.percentile(values, 75)),
                'p95': float(np.percentile(values, 95))
            }

        return {
            'num_runs': len(results),
            'final_staked_balance': compute_stats(final_staked),
            'final_min_balance': compute_stats(final_min),
            'cumulative_penalties': compute_stats(penalties)
        }
