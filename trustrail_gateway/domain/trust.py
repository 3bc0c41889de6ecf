"""Trust evaluation - score, approval decision and display tier for applications"""

import random
from typing import Dict, Optional

from trustrail_gateway.domain.exceptions import ValidationError
from trustrail_gateway.domain.models import (
    ApplicationSignals,
    ApplicationStatus,
    PaymentApplicationData,
    PaymentFrequency,
    PaymentType,
    TierPolicy,
    TrustAssessment,
    TrustRuleConfig,
    TrustTier,
)

BASE_SCORE = 50
BVN_BONUS = 20
MONTHLY_BONUS = 10
MAX_JITTER = 15  # exclusive upper bound

# (upper bound exclusive, bonus); amounts at or above the last bound get nothing
AMOUNT_BANDS = [
    (50_000, 20),
    (100_000, 15),
    (200_000, 10),
]

TIER_POLICIES: Dict[TrustTier, TierPolicy] = {
    TrustTier.TRUSTED: TierPolicy(TrustTier.TRUSTED, 0, "Full approval, no down payment required"),
    TrustTier.VERIFIED: TierPolicy(TrustTier.VERIFIED, 20, "80% approval, 20% down payment"),
    TrustTier.NEW: TierPolicy(TrustTier.NEW, 50, "50% down payment required"),
    TrustTier.RESTRICTED: TierPolicy(TrustTier.RESTRICTED, None, "Emergency requests only"),
    TrustTier.DEFAULTED: TierPolicy(TrustTier.DEFAULTED, None, "No instalments allowed"),
}


def application_amount(data: PaymentApplicationData) -> float:
    """Amount at risk: total for instalments, recurring charge for subscriptions"""
    if data.payment_type == PaymentType.INSTALMENT:
        return data.total_amount or 0
    return data.recurring_amount or 0


def signals_from_application(data: PaymentApplicationData) -> ApplicationSignals:
    """Extract the scoring inputs from a submitted application"""
    return ApplicationSignals(
        has_bvn=bool(data.customer_bvn),
        amount=application_amount(data),
        payment_frequency=PaymentFrequency(data.payment_frequency).value,
    )


def compute_trust_score(signals: ApplicationSignals, jitter: int = 0) -> int:
    """
    Heuristic trust score from 0 (no trust) to 100 (full trust).

    Components:
    - 50 base
    - +20 when a BVN was supplied
    - +20 / +15 / +10 / +0 for amounts under 50k / 100k / 200k / above
    - +10 for monthly payment frequency
    - jitter in [0, 15), supplied by the caller

    Without jitter the score lies in [50, 100].
    """
    if not 0 <= jitter < MAX_JITTER:
        raise ValidationError(f"Jitter must be in [0, {MAX_JITTER}), got {jitter}")

    score = BASE_SCORE

    if signals.has_bvn:
        score += BVN_BONUS

    for upper_bound, bonus in AMOUNT_BANDS:
        if signals.amount < upper_bound:
            score += bonus
            break

    if signals.payment_frequency == PaymentFrequency.MONTHLY.value:
        score += MONTHLY_BONUS

    score += jitter

    return min(100, max(0, int(score)))


def status_from_score(score: int, rules: Optional[TrustRuleConfig] = None) -> ApplicationStatus:
    """
    Map a trust score to an approval decision using the business's thresholds.

    score >= auto_approve_threshold -> approved
    score <  auto_decline_threshold -> declined
    anything in between             -> under_review
    """
    rules = rules or TrustRuleConfig()

    if score >= rules.auto_approve_threshold:
        return ApplicationStatus.APPROVED
    elif score >= rules.auto_decline_threshold:
        return ApplicationStatus.UNDER_REVIEW
    else:
        return ApplicationStatus.DECLINED


def trust_tier_for_score(
    score: int,
    rules: Optional[TrustRuleConfig] = None,
    successful_payments: Optional[int] = None,
) -> TrustTier:
    """
    Bucket a score into a display tier, evaluated high to low.

    When successful_payments is known, customers short of
    min_history_for_trusted cannot be TRUSTED and fall back to VERIFIED.
    """
    rules = rules or TrustRuleConfig()

    if score >= rules.trusted_min:
        if successful_payments is not None and successful_payments < rules.min_history_for_trusted:
            return TrustTier.VERIFIED
        return TrustTier.TRUSTED
    elif score >= rules.verified_min:
        return TrustTier.VERIFIED
    elif score >= rules.new_min:
        return TrustTier.NEW
    elif score >= rules.restricted_min:
        return TrustTier.RESTRICTED
    else:
        return TrustTier.DEFAULTED


def validate_trust_rules(rules: TrustRuleConfig) -> None:
    """Reject overlapping tiers, inverted approval thresholds and negative limits"""
    thresholds = [rules.trusted_min, rules.verified_min, rules.new_min, rules.restricted_min]
    if any(not 0 <= t <= 100 for t in thresholds):
        raise ValidationError("Tier thresholds must be between 0 and 100")
    if not rules.trusted_min > rules.verified_min > rules.new_min > rules.restricted_min:
        raise ValidationError(
            "Tier thresholds must be strictly decreasing: trusted > verified > new > restricted"
        )

    for name in ("auto_approve_threshold", "auto_decline_threshold"):
        if not 0 <= getattr(rules, name) <= 100:
            raise ValidationError(f"{name} must be between 0 and 100")
    if rules.auto_approve_threshold <= rules.auto_decline_threshold:
        raise ValidationError("auto_approve_threshold must be greater than auto_decline_threshold")

    if rules.max_outstanding_balance < 0:
        raise ValidationError("max_outstanding_balance cannot be negative")
    if rules.consecutive_failure_limit < 1:
        raise ValidationError("consecutive_failure_limit must be at least 1")
    if rules.late_payment_penalty < 0 or rules.on_time_bonus < 0:
        raise ValidationError("Payment penalties and bonuses cannot be negative")
    if rules.min_history_for_trusted < 0:
        raise ValidationError("min_history_for_trusted cannot be negative")


class TrustEvaluator:
    """Scores applications with an injected random source so runs are reproducible"""

    def __init__(self, rng: Optional[random.Random] = None, jitter_max: int = MAX_JITTER):
        if not 0 <= jitter_max <= MAX_JITTER:
            raise ValueError(f"jitter_max must be in [0, {MAX_JITTER}]")
        self.rng = rng or random.Random()
        self.jitter_max = jitter_max

    def draw_jitter(self) -> int:
        if self.jitter_max == 0:
            return 0
        return self.rng.randrange(self.jitter_max)

    def evaluate(self, data: PaymentApplicationData, rules: TrustRuleConfig) -> TrustAssessment:
        """Score an application and classify it against the business's rules"""
        jitter = self.draw_jitter()
        score = compute_trust_score(signals_from_application(data), jitter=jitter)

        return TrustAssessment(
            trust_score=score,
            status=status_from_score(score, rules),
            tier=trust_tier_for_score(score, rules),
            jitter=jitter,
        )
