"""Fatal simulation errors."""


class SimulationError(Exception):
    """Base class for errors that abort a simulation run."""


class InsufficientValidatorsError(SimulationError):
    """Fewer eligible (active, non-slashed) validators than proposer slots."""

    def __init__(self, eligible: int, required: int):
        self.eligible = eligible
        self.required = required
        super().__init__(
            f"Proposer selection needs {required} active, non-slashed validators, "
            f"only {eligible} eligible"
        )


class RewardOverflowError(SimulationError, ArithmeticError):
    """An FFG reward product left the unsigned 64-bit range."""
