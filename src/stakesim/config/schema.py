"""Pydantic schema for configuration validation."""

import hashlib
import json
import math
from functools import cached_property
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Protocol constants (base units are 1e-9 of a stake unit)
MAX_EFFECTIVE_BALANCE = 32_000_000_000
EFFECTIVE_BALANCE_INCREMENT = 1_000_000_000
BASE_REWARD_FACTOR = 64
BASE_REWARDS_PER_EPOCH = 4
PROPOSER_REWARD_QUOTIENT = 8
PROPOSERS_PER_EPOCH = 32

# Both balances are shifted right by this many bits before the FFG
# multiply-divide so the product stays inside 64 bits.
BALANCE_SHAVE_BITS = 5
MAX_UINT64 = 2**64 - 1


def compute_exp_value_inclusion_prob(p: float) -> float:
    """
    Expected inclusion value p * ln(p) / (p - 1).

    The expression is 0/0 at p = 1 and undefined at p = 0; both ends take
    their continuous limits (1.0 and 0.0).
    """
    if p >= 1.0:
        return 1.0
    if p <= 0.0:
        return 0.0
    return p * math.log(p) / (p - 1.0)


class Config(BaseModel):
    """Complete configuration for a stake simulation run."""
    model_config = ConfigDict(frozen=True)

    epochs: int = Field(gt=0, description="Number of epochs to simulate")
    total_at_stake_initial: int = Field(ge=0, description="Initial total stake in base units")
    probability_online: float = Field(ge=0, le=1, description="Probability a validator is online in an epoch")
    probability_honest: float = Field(ge=0, le=1, description="Probability a validator attests honestly")
    random_seed: Optional[int] = Field(default=None, description="Random seed for reproducibility")

    @computed_field
    @cached_property
    def exp_value_inclusion_prob(self) -> float:
        """Expected attestation inclusion factor derived from probability_online."""
        return compute_exp_value_inclusion_prob(self.probability_online)

    @property
    def initial_validator_count(self) -> int:
        """Number of validators the initial stake funds at max effective balance."""
        return self.total_at_stake_initial // MAX_EFFECTIVE_BALANCE

    def compute_hash(self) -> str:
        """Compute config hash for reproducibility."""
        config_dict = self.model_dump()
        config_str = json.dumps(config_dict, sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()
