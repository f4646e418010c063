"""Epoch-wide aggregates shared read-only by every per-validator computation."""

import math
from dataclasses import dataclass
from typing import Sequence

from .validator import Validator


@dataclass(frozen=True)
class EpochTotals:
    """Snapshot of a validator set before (or after) an epoch transition.

    - staked_balance: sum of balance over all validators
    - active_balance: sum of effective_balance over active validators
    - sqrt_active_balance: integer square root of active_balance
    - matching_balance: sum of effective_balance over active, non-slashed validators
    - active_validators: count of active validators
    - max_balance / min_balance: extremes of balance (0 for an empty set)
    """
    staked_balance: int
    active_balance: int
    sqrt_active_balance: int
    matching_balance: int
    active_validators: int
    max_balance: int
    min_balance: int

    @classmethod
    def from_validators(cls, validators: Sequence[Validator]) -> 'EpochTotals':
        """Compute totals in a single pass over the set."""
        staked = 0
        active = 0
        matching = 0
        active_count = 0
        max_balance = 0
        min_balance = None

        for v in validators:
            staked += v.balance
            if v.is_active:
                active += v.effective_balance
                active_count += 1
                if not v.is_slashed:
                    matching += v.effective_balance
            max_balance = max(max_balance, v.balance)
            min_balance = v.balance if min_balance is None else min(min_balance, v.balance)

        return cls(
            staked_balance=staked,
            active_balance=active,
            sqrt_active_balance=math.isqrt(active),
            matching_balance=matching,
            active_validators=active_count,
            max_balance=max_balance,
            min_balance=min_balance if min_balance is not None else 0,
        )
