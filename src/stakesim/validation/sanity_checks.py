"""Sanity checks and validation for simulation inputs and outputs."""

from dataclasses import dataclass
from typing import List, Optional

from ..config.schema import (
    EFFECTIVE_BALANCE_INCREMENT,
    MAX_EFFECTIVE_BALANCE,
    PROPOSERS_PER_EPOCH,
    Config,
)
from ..simulation.runner import SimulationResult


@dataclass
class ValidationWarning:
    """A validation warning with severity and message."""
    severity: str  # "warning" or "error"
    category: str  # e.g., "input", "invariant", "bounds"
    message: str
    details: Optional[str] = None


class SanityChecker:
    """Run sanity checks on configuration and simulation results."""

    def __init__(self, config: Config):
        """Initialize with configuration."""
        self.config = config

    def check_config_inputs(self) -> List[ValidationWarning]:
        """
        Check configuration inputs for implausible values.

        Returns:
            List of validation warnings
        """
        warnings = []

        validator_count = self.config.initial_validator_count
        if validator_count < PROPOSERS_PER_EPOCH:
            warnings.append(ValidationWarning(
                severity="error",
                category="bounds",
                message=f"Initial stake funds {validator_count} validators; proposer selection needs {PROPOSERS_PER_EPOCH}",
                details=f"Stake: {self.config.total_at_stake_initial:,} base units"
            ))

        remainder = self.config.total_at_stake_initial % MAX_EFFECTIVE_BALANCE
        if remainder:
            warnings.append(ValidationWarning(
                severity="warning",
                category="input",
                message="Initial stake is not a multiple of the max effective balance",
                details=f"{remainder:,} base units are not assigned to any validator"
            ))

        if self.config.probability_online == 0:
            warnings.append(ValidationWarning(
                severity="warning",
                category="input",
                message="probability_online is 0: every active validator is penalized every epoch",
            ))

        if self.config.probability_honest == 0:
            warnings.append(ValidationWarning(
                severity="warning",
                category="input",
                message="probability_honest is 0: every active validator is penalized every epoch",
            ))

        return warnings

    def check_results(self, result: SimulationResult) -> List[ValidationWarning]:
        """
        Check a finished run for invariant violations.

        Returns:
            List of validation warnings
        """
        warnings = []

        for index, v in enumerate(result.final_state.validators):
            if (
                v.effective_balance > MAX_EFFECTIVE_BALANCE
                or v.effective_balance % EFFECTIVE_BALANCE_INCREMENT
            ):
                warnings.append(ValidationWarning(
                    severity="error",
                    category="invariant",
                    message=f"Validator {index} has an off-grid or over-cap effective balance",
                    details=f"effective_balance={v.effective_balance:,}"
                ))

        for expected_epoch, row in enumerate(result.rows):
            if row.epoch != expected_epoch:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="invariant",
                    message=f"Report row {expected_epoch} carries epoch {row.epoch}",
                ))
            if row.min_balance > row.max_balance:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="invariant",
                    message=f"Epoch {row.epoch}: min balance exceeds max balance",
                    details=f"min={row.min_balance:,}, max={row.max_balance:,}"
                ))

        if any(v.balance == 0 for v in result.final_state.validators):
            warnings.append(ValidationWarning(
                severity="warning",
                category="bounds",
                message="Some validators were penalized down to a zero balance",
                details="Penalties beyond the balance are saturated at 0"
            ))

        return warnings


def validate_simulation_results(result: SimulationResult) -> List[ValidationWarning]:
    """Run config and result checks for a finished run."""
    checker = SanityChecker(result.config)
    return checker.check_config_inputs() + checker.check_results(result)
