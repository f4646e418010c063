"""Unit tests for attestation deltas and their application.

Reference values use the 500,000-unit genesis set (15,625 validators),
whose base reward is 22,897.
"""

import os
import sys
from dataclasses import replace

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from stakesim.config.schema import MAX_EFFECTIVE_BALANCE
from stakesim.engine.deltas import (
    Deltas,
    apply_deltas,
    compute_attester_reward,
    compute_ffg_reward,
    compute_proposer_reward,
    get_attestation_deltas,
)
from stakesim.engine.errors import RewardOverflowError
from stakesim.engine.state import State
from stakesim.engine.validator import EpochActivity, Validator

BASE_REWARD = 22_897
MATCHED = EpochActivity(has_matched_source=True, has_matched_target=True, has_matched_head=True)
MISSED = EpochActivity()


@pytest.fixture
def totals(default_config):
    return State.initial(default_config).totals()


def deltas_for(validator, activity, totals, config):
    base_reward = validator.get_base_reward(totals.sqrt_active_balance)
    return get_attestation_deltas(validator, activity, base_reward, totals, config)


class TestAttestationDeltas:
    """Reward/penalty branches."""

    def test_base_reward_of_reference_set(self, totals):
        assert Validator().get_base_reward(totals.sqrt_active_balance) == BASE_REWARD

    @pytest.mark.parametrize("activity", [MATCHED, MISSED, replace(MATCHED, is_proposer=True)])
    @pytest.mark.parametrize("is_slashed", [False, True])
    def test_inactive_validator_gets_nothing(self, totals, default_config, activity, is_slashed):
        validator = Validator(is_active=False, is_slashed=is_slashed)
        assert deltas_for(validator, activity, totals, default_config) == Deltas()

    @pytest.mark.parametrize("activity", [MATCHED, MISSED, replace(MATCHED, is_proposer=True)])
    def test_slashed_validator_penalized(self, totals, default_config, activity):
        deltas = deltas_for(Validator(is_slashed=True), activity, totals, default_config)
        assert deltas.head_ffg_penalty == 3 * BASE_REWARD == 68_691
        assert deltas.head_ffg_reward == 0
        assert deltas.proposer_reward == 0
        assert deltas.attester_reward == 0

    def test_missed_source_penalized(self, totals, default_config):
        deltas = deltas_for(Validator(), MISSED, totals, default_config)
        assert deltas == Deltas(head_ffg_penalty=68_691)

    def test_ffg_reward_full_participation(self, totals, default_config):
        deltas = deltas_for(Validator(), MATCHED, totals, default_config)
        assert deltas.head_ffg_reward == 3 * BASE_REWARD
        assert deltas.head_ffg_penalty == 0
        assert deltas.proposer_reward == 0

    def test_ffg_reward_scales_with_matching_balance(self, default_config):
        validators = State.initial(default_config).validators[:]
        # Slash a quarter of the set
        quarter = len(validators) // 4
        validators[:quarter] = [Validator(is_slashed=True)] * quarter
        totals = State(validators=validators).totals()

        deltas = deltas_for(Validator(), MATCHED, totals, default_config)
        expected = compute_ffg_reward(BASE_REWARD, totals.matching_balance, totals.active_balance)
        assert deltas.head_ffg_reward == expected
        assert deltas.head_ffg_reward < 3 * BASE_REWARD

    def test_proposer_reward_validator_is_proposer(self, totals, default_config):
        deltas = deltas_for(Validator(), replace(MATCHED, is_proposer=True), totals, default_config)
        # (22,897 // 8) * (15,625 // 32) = 2,862 * 488
        assert deltas.proposer_reward == 1_396_656

    def test_proposer_reward_validator_is_not_proposer(self, totals, default_config):
        assert deltas_for(Validator(), MATCHED, totals, default_config).proposer_reward == 0

    def test_attester_reward_full_inclusion(self, totals, default_config):
        assert default_config.exp_value_inclusion_prob == 1.0
        deltas = deltas_for(Validator(), MATCHED, totals, default_config)
        assert deltas.attester_reward == 20_035


class TestRewardFormulas:
    """Formula helpers."""

    def test_proposer_reward_floors_attestations(self):
        # 488 attesters * 0.99 * 0.5 = 241.56 -> 241
        assert compute_proposer_reward(BASE_REWARD, 15_625, 0.99, 0.5) == 2_862 * 241

    def test_attester_reward_floors(self):
        # 20,035 * 0.994983... = 19,934.48... -> 19,934
        assert compute_attester_reward(BASE_REWARD, 0.9949833) == 19_934

    def test_attester_reward_zero_inclusion(self):
        assert compute_attester_reward(BASE_REWARD, 0.0) == 0

    def test_ffg_reward_shaves_balances(self):
        # 100 >> 5 == 3 and 64 >> 5 == 2
        assert compute_ffg_reward(10, 100, 64) == 3 * 10 * 3 // 2

    def test_ffg_reward_without_active_stake(self):
        assert compute_ffg_reward(0, 0, 0) == 0

    def test_ffg_reward_active_stake_below_shave(self):
        # 31 >> 5 == 0
        assert compute_ffg_reward(10, 31, 31) == 0

    def test_ffg_reward_overflow_is_fatal(self):
        with pytest.raises(RewardOverflowError):
            compute_ffg_reward(2**40, 2**60, 2**60)

    def test_reference_set_does_not_overflow(self):
        active = 500_000 * 1_000_000_000
        assert compute_ffg_reward(BASE_REWARD, active, active) == 3 * BASE_REWARD


class TestApplyDeltas:
    """Balance updates."""

    def test_rewards_and_penalty_applied(self):
        validator = Validator(balance=MAX_EFFECTIVE_BALANCE)
        deltas = Deltas(head_ffg_reward=10, head_ffg_penalty=3, proposer_reward=100, attester_reward=7)
        assert apply_deltas(validator, deltas).balance == MAX_EFFECTIVE_BALANCE + 114

    def test_other_fields_unchanged(self):
        validator = Validator(balance=5, effective_balance=0, is_active=False, is_slashed=True)
        new_validator = apply_deltas(validator, Deltas(attester_reward=1))
        assert new_validator == replace(validator, balance=6)

    def test_effective_balance_not_touched(self):
        validator = Validator(balance=MAX_EFFECTIVE_BALANCE)
        new_validator = apply_deltas(validator, Deltas(head_ffg_penalty=5 * 10**9))
        assert new_validator.effective_balance == MAX_EFFECTIVE_BALANCE

    def test_underflow_saturates_at_zero(self):
        validator = Validator(balance=100, effective_balance=0)
        assert apply_deltas(validator, Deltas(head_ffg_penalty=500)).balance == 0

    def test_no_deltas_is_identity(self):
        validator = Validator(balance=12_345)
        assert apply_deltas(validator, Deltas()) == validator
