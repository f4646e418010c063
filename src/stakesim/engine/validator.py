"""A simplified proof-of-stake validator and its per-epoch formulas.

Key Concepts:
- base_reward = effective_balance * BASE_REWARD_FACTOR / sqrt(active_balance) / BASE_REWARDS_PER_EPOCH
- Effective balance moves with hysteresis: down as soon as balance drops below it,
  up only once balance exceeds it by 1.5 increments, always snapping to the grid
- Attestation flags are per-epoch scratch (EpochActivity), never carried state
"""

from dataclasses import dataclass, replace
from typing import AbstractSet

from ..config.schema import (
    BASE_REWARD_FACTOR,
    BASE_REWARDS_PER_EPOCH,
    EFFECTIVE_BALANCE_INCREMENT,
    MAX_EFFECTIVE_BALANCE,
    Config,
)
from .randomness import RandomSource


@dataclass(frozen=True)
class Validator:
    """Persistent validator record carried from epoch to epoch."""
    balance: int = MAX_EFFECTIVE_BALANCE  # Actual stake, base units
    effective_balance: int = MAX_EFFECTIVE_BALANCE  # Capped, grid-snapped stake used in reward math
    is_active: bool = True
    is_slashed: bool = False

    @property
    def is_eligible_proposer(self) -> bool:
        """Active and not slashed."""
        return self.is_active and not self.is_slashed

    def get_base_reward(self, sqrt_active_balance: int) -> int:
        """
        Compute the per-epoch base reward.

        Integer division throughout, truncating like the fixed-point reference.

        Args:
            sqrt_active_balance: Integer square root of total active balance

        Returns:
            Base reward in base units
        """
        # No active stake left to normalize against
        if sqrt_active_balance == 0:
            return 0
        return (
            self.effective_balance * BASE_REWARD_FACTOR
            // sqrt_active_balance
            // BASE_REWARDS_PER_EPOCH
        )

    def update_effective_balance(self) -> 'Validator':
        """Return a copy with effective balance updated under hysteresis."""
        half_increment = EFFECTIVE_BALANCE_INCREMENT // 2

        if (
            self.balance < self.effective_balance
            or self.effective_balance + 3 * half_increment < self.balance
        ):
            return replace(
                self,
                effective_balance=min(
                    self.balance - self.balance % EFFECTIVE_BALANCE_INCREMENT,
                    MAX_EFFECTIVE_BALANCE,
                ),
            )
        return self


@dataclass(frozen=True)
class EpochActivity:
    """What a validator did in the epoch being processed."""
    has_matched_source: bool = False
    has_matched_target: bool = False
    has_matched_head: bool = False
    is_proposer: bool = False


def update_previous_epoch_activity(
    validator: Validator,
    config: Config,
    proposer_indices: AbstractSet[int],
    validator_index: int,
    rng: RandomSource,
) -> EpochActivity:
    """
    Draw a validator's attestation outcome for one epoch.

    Consumes exactly two draws from rng: online first, honest second.

    Args:
        validator: Validator at the start of the epoch
        config: Simulation configuration
        proposer_indices: This epoch's proposer set
        validator_index: Position of validator in the set
        rng: Randomness source

    Returns:
        Fresh EpochActivity
    """
    has_been_online = config.probability_online > rng.random()
    has_been_honest = config.probability_honest > rng.random()
    has_matched_source = not validator.is_slashed and has_been_online and has_been_honest

    # The simplified model does not tell source, target and head apart
    return EpochActivity(
        has_matched_source=has_matched_source,
        has_matched_target=has_matched_source,
        has_matched_head=has_matched_source,
        is_proposer=validator_index in proposer_indices,
    )
