"""Unit tests for trust scoring, approval decisions and tiers"""

import random
import pytest
from dataclasses import replace
from trustrail_gateway.domain.models import (
    ApplicationSignals,
    ApplicationStatus,
    PaymentType,
    TrustRuleConfig,
    TrustTier,
)
from trustrail_gateway.domain.trust import (
    MAX_JITTER,
    TIER_POLICIES,
    TrustEvaluator,
    compute_trust_score,
    signals_from_application,
    status_from_score,
    trust_tier_for_score,
    validate_trust_rules,
)
from trustrail_gateway.domain.exceptions import ValidationError


def test_compute_trust_score_best_case_clamps_at_100():
    """Small amount + BVN + monthly with no jitter -> 50 + 20 + 20 + 10"""
    signals = ApplicationSignals(has_bvn=True, amount=40000, payment_frequency="monthly")
    assert compute_trust_score(signals, jitter=0) == 100
    assert compute_trust_score(signals, jitter=14) == 100  # Clamped


def test_compute_trust_score_amount_bands():
    """Each amount band adds its bonus; lower bound of each band is inclusive"""
    def score(amount):
        return compute_trust_score(ApplicationSignals(False, amount, "weekly"))

    assert score(0) == 70
    assert score(49_999) == 70
    assert score(50_000) == 65
    assert score(99_999) == 65
    assert score(100_000) == 60
    assert score(199_999) == 60
    assert score(200_000) == 50
    assert score(5_000_000) == 50


def test_compute_trust_score_bvn_and_frequency():
    base = ApplicationSignals(has_bvn=False, amount=250_000, payment_frequency="daily")
    assert compute_trust_score(base) == 50
    assert compute_trust_score(replace(base, has_bvn=True)) == 70
    assert compute_trust_score(replace(base, payment_frequency="monthly")) == 60
    assert compute_trust_score(replace(base, payment_frequency="biweekly")) == 50


@pytest.mark.parametrize("has_bvn", [True, False])
@pytest.mark.parametrize("amount", [0, 10_000, 60_000, 150_000, 900_000])
@pytest.mark.parametrize("frequency", ["monthly", "biweekly", "weekly", "daily"])
def test_compute_trust_score_range(has_bvn, amount, frequency):
    """Bonuses only add to the 50 base; jitter never pushes the score outside [0, 100]"""
    signals = ApplicationSignals(has_bvn, amount, frequency)
    assert 50 <= compute_trust_score(signals, jitter=0) <= 100
    for jitter in range(MAX_JITTER):
        assert 0 <= compute_trust_score(signals, jitter=jitter) <= 100


def test_compute_trust_score_rejects_out_of_range_jitter():
    signals = ApplicationSignals(False, 10_000, "monthly")
    with pytest.raises(ValidationError):
        compute_trust_score(signals, jitter=15)
    with pytest.raises(ValidationError):
        compute_trust_score(signals, jitter=-1)


def test_status_from_score_default_boundaries():
    """Upper bound of each bracket is inclusive"""
    assert status_from_score(70) == ApplicationStatus.APPROVED
    assert status_from_score(69) == ApplicationStatus.UNDER_REVIEW
    assert status_from_score(40) == ApplicationStatus.UNDER_REVIEW
    assert status_from_score(39) == ApplicationStatus.DECLINED
    assert status_from_score(100) == ApplicationStatus.APPROVED
    assert status_from_score(0) == ApplicationStatus.DECLINED


def test_status_from_score_uses_configured_thresholds():
    strict = TrustRuleConfig(auto_approve_threshold=85, auto_decline_threshold=60)
    assert status_from_score(84, strict) == ApplicationStatus.UNDER_REVIEW
    assert status_from_score(85, strict) == ApplicationStatus.APPROVED
    assert status_from_score(59, strict) == ApplicationStatus.DECLINED
    assert status_from_score(60, strict) == ApplicationStatus.UNDER_REVIEW


@pytest.mark.parametrize(
    "score,tier",
    [
        (100, TrustTier.TRUSTED),
        (80, TrustTier.TRUSTED),
        (79, TrustTier.VERIFIED),
        (60, TrustTier.VERIFIED),
        (59, TrustTier.NEW),
        (40, TrustTier.NEW),
        (39, TrustTier.RESTRICTED),
        (20, TrustTier.RESTRICTED),
        (19, TrustTier.DEFAULTED),
        (0, TrustTier.DEFAULTED),
    ],
)
def test_trust_tier_for_score_default_config(score, tier):
    assert trust_tier_for_score(score) == tier


def test_trust_tier_requires_history_for_trusted():
    rules = TrustRuleConfig(min_history_for_trusted=6)
    assert trust_tier_for_score(90, rules, successful_payments=5) == TrustTier.VERIFIED
    assert trust_tier_for_score(90, rules, successful_payments=6) == TrustTier.TRUSTED
    # History only gates TRUSTED
    assert trust_tier_for_score(65, rules, successful_payments=0) == TrustTier.VERIFIED


def test_tier_policies_down_payments():
    assert TIER_POLICIES[TrustTier.TRUSTED].down_payment_percentage == 0
    assert TIER_POLICIES[TrustTier.VERIFIED].down_payment_percentage == 20
    assert TIER_POLICIES[TrustTier.NEW].down_payment_percentage == 50
    assert TIER_POLICIES[TrustTier.RESTRICTED].down_payment_percentage is None
    assert TIER_POLICIES[TrustTier.DEFAULTED].down_payment_percentage is None


def test_validate_trust_rules_accepts_defaults():
    validate_trust_rules(TrustRuleConfig())


@pytest.mark.parametrize(
    "changes",
    [
        {"verified_min": 80},  # trusted == verified
        {"new_min": 70},  # new above verified
        {"restricted_min": -1},
        {"trusted_min": 101},
        {"auto_approve_threshold": 40},  # equal to decline
        {"auto_approve_threshold": 30},  # below decline
        {"max_outstanding_balance": -5},
        {"consecutive_failure_limit": 0},
        {"late_payment_penalty": -1},
        {"min_history_for_trusted": -1},
    ],
)
def test_validate_trust_rules_rejects_inconsistent_config(changes):
    with pytest.raises(ValidationError):
        validate_trust_rules(replace(TrustRuleConfig(), **changes))


def test_signals_from_application_uses_amount_for_payment_type(instalment_data):
    signals = signals_from_application(instalment_data)
    assert signals.amount == 75000
    assert signals.has_bvn is False
    assert signals.payment_frequency == "monthly"

    subscription = replace(
        instalment_data,
        payment_type=PaymentType.SUBSCRIPTION,
        total_amount=None,
        recurring_amount=12000,
        commitment_months=6,
        customer_bvn="12345678901",
    )
    signals = signals_from_application(subscription)
    assert signals.amount == 12000
    assert signals.has_bvn is True


def test_evaluator_without_jitter_is_deterministic(instalment_data):
    """75k, no BVN, monthly -> 50 + 15 + 10 = 75"""
    evaluator = TrustEvaluator(jitter_max=0)
    assessment = evaluator.evaluate(instalment_data, TrustRuleConfig())

    assert assessment.trust_score == 75
    assert assessment.jitter == 0
    assert assessment.status == ApplicationStatus.APPROVED
    assert assessment.tier == TrustTier.VERIFIED


def test_evaluator_seeded_jitter_is_reproducible(instalment_data):
    rules = TrustRuleConfig()
    evaluator_a = TrustEvaluator(rng=random.Random(42))
    evaluator_b = TrustEvaluator(rng=random.Random(42))
    scores_a = [evaluator_a.evaluate(instalment_data, rules).trust_score for _ in range(20)]
    scores_b = [evaluator_b.evaluate(instalment_data, rules).trust_score for _ in range(20)]

    assert scores_a == scores_b
    assert all(75 <= s <= 89 for s in scores_a)


def test_evaluator_rejects_jitter_max_above_limit():
    with pytest.raises(ValueError):
        TrustEvaluator(jitter_max=16)
