"""Installment schedule preview for INSTALMENT applications"""

from datetime import date
from typing import List

from trustrail_gateway.domain.exceptions import ValidationError
from trustrail_gateway.domain.models import InstallmentSchedule, PaymentFrequency, PaymentRules, ScheduleEntry
from trustrail_gateway.utils.date_utils import nth_payment_date

INTEREST_PER_PERIOD = "per_period"
INTEREST_FLAT = "flat"


def calculate_total_interest(
    remaining: float,
    interest_rate: float,
    num_installments: int,
    method: str = INTEREST_PER_PERIOD,
) -> float:
    """
    Interest charged on the financed balance.

    per_period: interest_rate % of the financed balance is charged once per
                instalment (flat rate, N times).
    flat:       interest_rate % of the financed balance is charged once.
    """
    interest = remaining * interest_rate / 100
    if method == INTEREST_PER_PERIOD:
        return interest * num_installments
    if method == INTEREST_FLAT:
        return interest
    raise ValidationError(f"Unknown interest method: {method}")


def generate_installment_schedule(
    total_amount: float,
    down_payment_percentage: float,
    num_installments: int,
    start_date: date,
    payment_frequency: str = PaymentFrequency.MONTHLY.value,
    enable_fees: bool = False,
    interest_rate: float = 0,
    interest_method: str = INTEREST_PER_PERIOD,
) -> InstallmentSchedule:
    """
    Split an instalment purchase into a down payment and N equal payments.

    Steps:
    - down payment = total * percentage / 100, paid up front
    - the remainder plus interest (only when fees are enabled) is divided
      equally across num_installments payments
    - payment i falls (i - 1) intervals after start_date; monthly plans step
      by calendar month, the others by 1 / 7 / 14 days

    Pure function: identical inputs always give identical schedules.

    Example:
        150,000 at 30% down over 6 monthly payments, no fees
        -> 45,000 down, 6 x 17,500, total 150,000
    """
    if total_amount <= 0:
        raise ValidationError("total_amount must be greater than 0")
    if not 0 <= down_payment_percentage <= 100:
        raise ValidationError("down_payment_percentage must be between 0 and 100")
    if num_installments < 1:
        raise ValidationError("num_installments must be at least 1")
    if interest_rate < 0:
        raise ValidationError("interest_rate cannot be negative")

    try:
        frequency = PaymentFrequency(payment_frequency).value
    except ValueError as e:
        raise ValidationError(f"Unsupported payment_frequency: {payment_frequency}") from e

    down_payment = total_amount * down_payment_percentage / 100
    remaining = total_amount - down_payment

    total_interest = (
        calculate_total_interest(remaining, interest_rate, num_installments, interest_method)
        if enable_fees
        else 0.0
    )
    installment_amount = (remaining + total_interest) / num_installments

    schedule: List[ScheduleEntry] = [
        ScheduleEntry(
            number=i,
            date=nth_payment_date(start_date, frequency, i),
            amount=installment_amount,
        )
        for i in range(1, num_installments + 1)
    ]

    return InstallmentSchedule(
        down_payment=down_payment,
        installment_amount=installment_amount,
        num_installments=num_installments,
        total_interest=total_interest,
        total=total_amount + total_interest,
        schedule=schedule,
    )


def schedule_for_rules(
    total_amount: float,
    rules: PaymentRules,
    start_date: date,
    payment_frequency: str,
    interest_method: str = INTEREST_PER_PERIOD,
) -> InstallmentSchedule:
    """Schedule preview using a business's stored payment rules"""
    return generate_installment_schedule(
        total_amount=total_amount,
        down_payment_percentage=rules.down_payment_percentage,
        num_installments=rules.max_instalment_period,
        start_date=start_date,
        payment_frequency=payment_frequency,
        enable_fees=rules.enable_fees,
        interest_rate=rules.interest_rate,
        interest_method=interest_method,
    )
