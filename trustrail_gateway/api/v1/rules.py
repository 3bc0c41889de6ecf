"""Trust rules and payment rules configuration per business"""

import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from trustrail_gateway.api.v1.businesses import load_business
from trustrail_gateway.api.v1.schemas import (
    PaymentRulesResponse,
    PaymentRulesSchema,
    TierPolicyResponse,
    TrustRulesResponse,
    TrustRulesSchema,
)
from trustrail_gateway.api.dependencies import get_request_id
from trustrail_gateway.infrastructure.database.session import get_db
from trustrail_gateway.infrastructure.database.repositories import RulesRepository
from trustrail_gateway.domain.models import PaymentRules, TrustRuleConfig
from trustrail_gateway.domain.trust import TIER_POLICIES, trust_tier_for_score, validate_trust_rules
from trustrail_gateway.domain.exceptions import ValidationError

router = APIRouter()


@router.get("/businesses/{business_id}/trust-rules", response_model=TrustRulesResponse)
def get_trust_rules(business_id: str, db: Session = Depends(get_db)):
    """Current trust rules; businesses without stored rules get the defaults"""
    business = load_business(db, business_id)
    rules = RulesRepository(db).get_trust_rules(business.id)
    db.commit()
    return TrustRulesResponse(business_id=business.id, **asdict(rules))


@router.put("/businesses/{business_id}/trust-rules", response_model=TrustRulesResponse)
def update_trust_rules(
    business_id: str,
    request_body: TrustRulesSchema,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Replace a business's trust rules.

    Rejected with 422 when tiers overlap or the auto-approve threshold
    is not above the auto-decline threshold.
    """
    business = load_business(db, business_id)
    rules = TrustRuleConfig(**request_body.model_dump())

    try:
        validate_trust_rules(rules)
    except ValidationError as e:
        logging.warning(f"Invalid trust rules: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    RulesRepository(db).save_trust_rules(business.id, rules)
    db.commit()
    return TrustRulesResponse(business_id=business.id, **asdict(rules))


@router.get("/businesses/{business_id}/trust-tier", response_model=TierPolicyResponse)
def get_trust_tier(
    business_id: str,
    score: int = Query(..., ge=0, le=100),
    db: Session = Depends(get_db),
):
    """Tier and down-payment policy a score falls into under the business's rules"""
    business = load_business(db, business_id)
    rules = RulesRepository(db).get_trust_rules(business.id)
    db.commit()

    policy = TIER_POLICIES[trust_tier_for_score(score, rules)]
    return TierPolicyResponse(
        score=score,
        tier=policy.tier,
        down_payment_percentage=policy.down_payment_percentage,
        description=policy.description,
    )


@router.get("/businesses/{business_id}/payment-rules", response_model=PaymentRulesResponse)
def get_payment_rules(business_id: str, db: Session = Depends(get_db)):
    business = load_business(db, business_id)
    rules = RulesRepository(db).get_payment_rules(business.id)
    db.commit()
    return PaymentRulesResponse(business_id=business.id, **asdict(rules))


@router.put("/businesses/{business_id}/payment-rules", response_model=PaymentRulesResponse)
def update_payment_rules(business_id: str, request_body: PaymentRulesSchema, db: Session = Depends(get_db)):
    """Replace a business's instalment terms"""
    business = load_business(db, business_id)
    rules = PaymentRules(**request_body.model_dump())
    RulesRepository(db).save_payment_rules(business.id, rules)
    db.commit()
    return PaymentRulesResponse(business_id=business.id, **asdict(rules))
