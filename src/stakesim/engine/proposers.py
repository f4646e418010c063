"""Effective-balance-weighted proposer selection by rejection sampling."""

from typing import FrozenSet, Sequence

from ..config.schema import MAX_EFFECTIVE_BALANCE, PROPOSERS_PER_EPOCH
from .errors import InsufficientValidatorsError
from .randomness import RandomSource
from .validator import Validator

MAX_RANDOM_BYTE = 255


def pick_epoch_proposers(
    validators: Sequence[Validator],
    rng: RandomSource,
    count: int = PROPOSERS_PER_EPOCH,
) -> FrozenSet[int]:
    """
    Pick this epoch's proposers.

    A uniformly drawn candidate is accepted with probability
    effective_balance / MAX_EFFECTIVE_BALANCE (quantised to a random byte),
    so higher-stake validators are proposers more often.

    Args:
        validators: Validator set at the start of the epoch
        rng: Randomness source
        count: Number of distinct proposers to return

    Returns:
        Set of `count` distinct indices of active, non-slashed validators

    Raises:
        InsufficientValidatorsError: If fewer than `count` validators are eligible
    """
    eligible = sum(1 for v in validators if v.is_eligible_proposer)
    if eligible < count:
        raise InsufficientValidatorsError(eligible, count)

    n = len(validators)
    proposers = set()

    while len(proposers) < count:
        candidate = int(rng.integers(0, n))
        validator = validators[candidate]
        if not validator.is_eligible_proposer or candidate in proposers:
            continue

        random_byte = int(rng.integers(0, MAX_RANDOM_BYTE + 1))
        if validator.effective_balance * MAX_RANDOM_BYTE >= random_byte * MAX_EFFECTIVE_BALANCE:
            proposers.add(candidate)

    return frozenset(proposers)
