"""Module: Attestation deltas - rewards and penalties for one validator in one epoch.

Key Concepts:
- Inactive validators are left untouched
- Slashed or non-matching validators pay 3 * base_reward
- Matching validators earn an FFG reward scaled by matching/active balance,
  an attester reward scaled by the expected inclusion factor and, when
  proposing, a share per expected attestation
"""

import logging
import math
from dataclasses import dataclass, replace

from ..config.schema import (
    BALANCE_SHAVE_BITS,
    MAX_UINT64,
    PROPOSER_REWARD_QUOTIENT,
    PROPOSERS_PER_EPOCH,
    Config,
)
from .errors import RewardOverflowError
from .totals import EpochTotals
from .validator import EpochActivity, Validator

logger = logging.getLogger(__name__)


@dataclass
class Deltas:
    """Reward/penalty breakdown for one validator in one epoch."""
    head_ffg_reward: int = 0
    head_ffg_penalty: int = 0
    proposer_reward: int = 0
    attester_reward: int = 0

    @property
    def total_reward(self) -> int:
        return self.head_ffg_reward + self.proposer_reward + self.attester_reward


def get_attestation_deltas(
    validator: Validator,
    activity: EpochActivity,
    base_reward: int,
    totals: EpochTotals,
    config: Config,
) -> Deltas:
    """
    Compute a validator's deltas against the pre-epoch totals.

    Args:
        validator: Validator at the start of the epoch
        activity: This epoch's drawn activity for the validator
        base_reward: Validator's base reward for the epoch
        totals: Pre-epoch aggregates
        config: Simulation configuration

    Returns:
        Deltas (all zero for inactive validators)
    """
    deltas = Deltas()

    if not validator.is_active:
        return deltas

    if validator.is_slashed or not activity.has_matched_source:
        deltas.head_ffg_penalty = 3 * base_reward
        return deltas

    deltas.head_ffg_reward = compute_ffg_reward(
        base_reward, totals.matching_balance, totals.active_balance
    )

    if activity.is_proposer:
        deltas.proposer_reward = compute_proposer_reward(
            base_reward,
            totals.active_validators,
            config.probability_online,
            config.probability_honest,
        )

    deltas.attester_reward = compute_attester_reward(
        base_reward, config.exp_value_inclusion_prob
    )
    return deltas


def compute_ffg_reward(base_reward: int, matching_balance: int, active_balance: int) -> int:
    """
    FFG reward: 3 * base_reward * matching_balance / active_balance.

    Both balances are shifted right by BALANCE_SHAVE_BITS first so the
    product fits an unsigned 64-bit integer.

    Returns 0 when the shifted active balance is 0.

    Raises:
        RewardOverflowError: If the product still exceeds 64 bits
    """
    scaled_matching = matching_balance >> BALANCE_SHAVE_BITS
    scaled_active = active_balance >> BALANCE_SHAVE_BITS
    # Active stake too small to survive the shave
    if scaled_active == 0:
        return 0

    product = 3 * base_reward * scaled_matching
    if product > MAX_UINT64:
        raise RewardOverflowError(
            f"FFG reward product {product} exceeds 64 bits "
            f"(base_reward={base_reward}, matching_balance={matching_balance})"
        )
    return product // scaled_active


def compute_proposer_reward(
    base_reward: int,
    active_validators: int,
    probability_online: float,
    probability_honest: float,
) -> int:
    """Proposer share per expected attestation included in the block."""
    proposer_reward_amount = base_reward // PROPOSER_REWARD_QUOTIENT
    number_of_attesters = active_validators // PROPOSERS_PER_EPOCH
    number_of_attestations = math.floor(
        number_of_attesters * probability_online * probability_honest
    )
    return proposer_reward_amount * number_of_attestations


def compute_attester_reward(base_reward: int, exp_value_inclusion_prob: float) -> int:
    """Attester reward: the non-proposer share, scaled by the inclusion factor."""
    proposer_reward_amount = base_reward // PROPOSER_REWARD_QUOTIENT
    maximum_attester_reward = base_reward - proposer_reward_amount
    return math.floor(maximum_attester_reward * exp_value_inclusion_prob)


def apply_deltas(validator: Validator, deltas: Deltas) -> Validator:
    """
    Apply deltas to a validator's balance.

    A penalty larger than the balance plus rewards saturates the balance at zero.

    Returns:
        New Validator; all other fields unchanged
    """
    balance = validator.balance + deltas.total_reward - deltas.head_ffg_penalty

    if balance < 0:
        logger.warning(
            f"Penalty {deltas.head_ffg_penalty} exceeds balance {validator.balance}; "
            f"saturating at 0"
        )
        balance = 0

    return replace(validator, balance=balance)
