"""The simulation state carried between epochs."""

from dataclasses import dataclass, field
from typing import List

from ..config.schema import EFFECTIVE_BALANCE_INCREMENT, MAX_EFFECTIVE_BALANCE, Config
from .totals import EpochTotals
from .validator import Validator


@dataclass
class State:
    """Validator set at an epoch boundary."""
    validators: List[Validator] = field(default_factory=list)

    @classmethod
    def initial(cls, config: Config) -> 'State':
        """
        Build the genesis validator set.

        The initial stake is split into validators at MAX_EFFECTIVE_BALANCE;
        any remainder below one full validator is dropped.
        """
        validator = Validator(
            balance=MAX_EFFECTIVE_BALANCE,
            effective_balance=MAX_EFFECTIVE_BALANCE,
            is_active=True,
            is_slashed=False,
        )
        # Validator is frozen, so sharing one instance is safe
        return cls(validators=[validator] * config.initial_validator_count)

    def validate_effective_balances(self) -> None:
        """
        Check every effective balance is capped and on the increment grid.

        Raises:
            ValueError: On the first validator violating either rule
        """
        for index, v in enumerate(self.validators):
            if v.effective_balance > MAX_EFFECTIVE_BALANCE:
                raise ValueError(
                    f"Validator {index}: effective_balance {v.effective_balance} exceeds {MAX_EFFECTIVE_BALANCE}"
                )
            if v.effective_balance % EFFECTIVE_BALANCE_INCREMENT:
                raise ValueError(
                    f"Validator {index}: effective_balance {v.effective_balance} is not a multiple "
                    f"of {EFFECTIVE_BALANCE_INCREMENT}"
                )

    def __len__(self) -> int:
        return len(self.validators)

    def totals(self) -> EpochTotals:
        return EpochTotals.from_validators(self.validators)
