"""Epoch transition: one step of the rewards-and-penalties fold.

Every validator is processed against the same pre-epoch totals; no
validator's new state feeds into a sibling's computation within the epoch.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from ..config.schema import Config
from ..engine.deltas import Deltas, apply_deltas, get_attestation_deltas
from ..engine.proposers import pick_epoch_proposers
from ..engine.randomness import RandomSource
from ..engine.state import State
from ..engine.totals import EpochTotals
from ..engine.validator import update_previous_epoch_activity

logger = logging.getLogger(__name__)


@dataclass
class EpochReportRow:
    """Aggregated deltas and post-epoch totals for one epoch."""
    epoch: int
    head_ffg_reward: int = 0
    head_ffg_penalty: int = 0
    proposer_reward: int = 0
    attester_reward: int = 0
    # Post-epoch totals, filled in by close()
    staked_balance: int = 0
    active_balance: int = 0
    max_balance: int = 0
    min_balance: int = 0
    validators: int = 0
    active_validators: int = 0
    closed: bool = False

    @classmethod
    def open(cls, epoch: int) -> 'EpochReportRow':
        return cls(epoch=epoch)

    def aggregate(self, deltas: Deltas) -> None:
        """Add one validator's deltas to the running sums."""
        if self.closed:
            raise RuntimeError(f"Report row for epoch {self.epoch} is already closed")
        self.head_ffg_reward += deltas.head_ffg_reward
        self.head_ffg_penalty += deltas.head_ffg_penalty
        self.proposer_reward += deltas.proposer_reward
        self.attester_reward += deltas.attester_reward

    def close(self, post_totals: EpochTotals, validator_count: int) -> None:
        """Record post-epoch totals; the row is read-only afterwards."""
        self.staked_balance = post_totals.staked_balance
        self.active_balance = post_totals.active_balance
        self.max_balance = post_totals.max_balance
        self.min_balance = post_totals.min_balance
        self.validators = validator_count
        self.active_validators = post_totals.active_validators
        self.closed = True

    @property
    def net_reward(self) -> int:
        """Rewards minus penalties paid out this epoch."""
        return (
            self.head_ffg_reward
            + self.proposer_reward
            + self.attester_reward
            - self.head_ffg_penalty
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop('closed')
        data['net_reward'] = self.net_reward
        return data


def process_epoch(
    pre_state: State,
    totals: EpochTotals,
    epoch_id: int,
    config: Config,
    rng: RandomSource,
) -> Tuple[State, EpochReportRow]:
    """
    Run one epoch transition.

    Args:
        pre_state: Validator set at the start of the epoch
        totals: Aggregates computed from pre_state
        epoch_id: Index of this epoch
        config: Simulation configuration
        rng: Randomness source

    Returns:
        (post_state, closed report row)

    Raises:
        InsufficientValidatorsError: If proposers cannot be selected
        RewardOverflowError: If an FFG reward leaves the 64-bit range
    """
    report_row = EpochReportRow.open(epoch_id)
    proposer_indices = pick_epoch_proposers(pre_state.validators, rng)

    post_validators = []
    for validator_index, validator in enumerate(pre_state.validators):
        activity = update_previous_epoch_activity(
            validator, config, proposer_indices, validator_index, rng
        )
        base_reward = validator.get_base_reward(totals.sqrt_active_balance)

        deltas = get_attestation_deltas(validator, activity, base_reward, totals, config)
        new_validator = apply_deltas(validator, deltas).update_effective_balance()

        post_validators.append(new_validator)
        report_row.aggregate(deltas)

    post_state = State(validators=post_validators)
    report_row.close(post_state.totals(), len(post_state))

    logger.debug(
        f"Epoch {epoch_id}: staked={report_row.staked_balance} "
        f"net_reward={report_row.net_reward} penalties={report_row.head_ffg_penalty}"
    )
    return post_state, report_row
