"""Payment application validation"""

import re
from typing import Optional

from trustrail_gateway.domain.exceptions import ValidationError
from trustrail_gateway.domain.models import PaymentApplicationData, PaymentRules, PaymentType

BVN_LENGTH = 11
ACCOUNT_NUMBER_PATTERN = re.compile(r"^\d{10}$")
MIN_SUBSCRIPTION_AMOUNT = 5_000


def normalize_bvn(bvn: Optional[str]) -> Optional[str]:
    """Strip formatting from a BVN; blank input means no BVN was supplied"""
    if bvn is None:
        return None
    digits = re.sub(r"\D", "", bvn)
    return digits or None


def validate_account_number(account_number: Optional[str]) -> None:
    if not account_number:
        raise ValidationError("Account number is required")
    if not ACCOUNT_NUMBER_PATTERN.match(account_number):
        raise ValidationError("Account number must be 10 digits")


def validate_application(data: PaymentApplicationData, payment_rules: PaymentRules) -> None:
    """
    Check a submission against the rules for its payment type.

    INSTALMENT needs a positive total_amount of at least the business's
    min_order_value. SUBSCRIPTION needs a recurring_amount of at least
    5,000 and a commitment of one month or more. The amount fields
    of the other payment type must be left empty.

    Raises:
        ValidationError: naming the first offending field
    """
    for name in ("customer_name", "customer_email", "customer_phone"):
        if not (getattr(data, name) or "").strip():
            raise ValidationError(f"{name} is required")

    if data.customer_bvn is not None and len(data.customer_bvn) != BVN_LENGTH:
        raise ValidationError("BVN must be 11 digits")

    if data.payment_type == PaymentType.INSTALMENT:
        if data.recurring_amount is not None or data.commitment_months is not None:
            raise ValidationError(
                "recurring_amount and commitment_months are only accepted for SUBSCRIPTION payments"
            )
        if data.total_amount is None:
            raise ValidationError("total_amount is required for INSTALMENT payments")
        if data.total_amount <= 0:
            raise ValidationError("total_amount must be greater than 0")
        if data.total_amount < payment_rules.min_order_value:
            raise ValidationError(f"Minimum amount is {payment_rules.min_order_value:,.0f}")

    elif data.payment_type == PaymentType.SUBSCRIPTION:
        if data.total_amount is not None:
            raise ValidationError("total_amount is only accepted for INSTALMENT payments")
        if data.recurring_amount is None:
            raise ValidationError("recurring_amount is required for SUBSCRIPTION payments")
        if data.recurring_amount <= 0:
            raise ValidationError("recurring_amount must be greater than 0")
        if data.recurring_amount < MIN_SUBSCRIPTION_AMOUNT:
            raise ValidationError(f"Minimum subscription amount is {MIN_SUBSCRIPTION_AMOUNT:,}")
        if data.commitment_months is None or data.commitment_months < 1:
            raise ValidationError("commitment_months must be at least 1 for SUBSCRIPTION payments")

    else:
        raise ValidationError(f"Unknown payment_type: {data.payment_type}")

    if data.preferred_start_date is None:
        raise ValidationError("preferred_start_date is required")

    if not data.bank_name:
        raise ValidationError("bank_name is required")
    validate_account_number(data.account_number)
    if not data.account_name:
        raise ValidationError("account_name is required")
