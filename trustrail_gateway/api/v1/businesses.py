"""Business registry, payment link and dashboard endpoints"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from trustrail_gateway.api.v1.schemas import (
    BusinessRegisterRequest,
    BusinessResponse,
    CustomerResponse,
    DashboardStatsResponse,
    PaymentApplicationResponse,
    SlugUpdateRequest,
    SuccessResponse,
    TransactionItem,
)
from trustrail_gateway.api.dependencies import get_request_id, parse_uuid
from trustrail_gateway.infrastructure.database.session import get_db
from trustrail_gateway.infrastructure.database.models import Business
from trustrail_gateway.infrastructure.database.repositories import (
    ApplicationRepository,
    BusinessRepository,
    CustomerRepository,
    RulesRepository,
)
from trustrail_gateway.domain.businesses import slugify, unique_slug
from trustrail_gateway.domain.customers import dashboard_stats
from trustrail_gateway.domain.models import ApplicationStatus
from trustrail_gateway.domain.trust import trust_tier_for_score
from trustrail_gateway.domain.exceptions import ConflictError, NotFoundError, ValidationError

router = APIRouter()


def load_business(db: Session, business_id: str) -> Business:
    """Fetch a business by path ID or fail with 404"""
    try:
        return BusinessRepository(db).get_by_id(parse_uuid(business_id, "business ID"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/businesses/register", response_model=BusinessResponse, status_code=201)
def register_business(
    request_body: BusinessRegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Register a business with default payment and trust rules.

    The payment slug is derived from the business name and made unique.
    """
    request_id = get_request_id(request)
    business_repo = BusinessRepository(db)

    try:
        if business_repo.email_exists(request_body.email):
            raise ConflictError("A business with this email already exists")

        slug = unique_slug(request_body.business_name, business_repo.slug_taken)
        business = business_repo.create_business(
            business_name=request_body.business_name,
            email=request_body.email,
            phone=request_body.phone,
            industry=request_body.industry,
            payment_slug=slug,
        )
        db.commit()
        db.refresh(business)

    except ConflictError as e:
        db.rollback()
        logging.warning(f"Registration conflict: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    logging.info(
        "Business registered",
        extra={"request_id": request_id, "business_id": str(business.id), "payment_slug": slug},
    )
    return business


@router.get("/businesses/slug/{slug}", response_model=BusinessResponse)
def get_business_by_slug(slug: str, db: Session = Depends(get_db)):
    """Resolve a payment link to its business"""
    try:
        return BusinessRepository(db).get_by_slug(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/businesses/email/{email}", response_model=BusinessResponse)
def get_business_by_email(email: str, db: Session = Depends(get_db)):
    try:
        return BusinessRepository(db).get_by_email(email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/businesses/{business_id}", response_model=BusinessResponse)
def get_business(business_id: str, db: Session = Depends(get_db)):
    return load_business(db, business_id)


@router.put("/businesses/{business_id}/slug", response_model=SuccessResponse)
def update_slug(business_id: str, request_body: SlugUpdateRequest, db: Session = Depends(get_db)):
    """Change the payment link slug; the value is sanitized the same way registration derives it"""
    business = load_business(db, business_id)
    slug = slugify(request_body.slug)

    if not slug:
        raise HTTPException(status_code=422, detail="Slug must contain letters or digits")

    business_repo = BusinessRepository(db)
    if business_repo.slug_taken(slug, exclude_id=business.id):
        raise HTTPException(status_code=409, detail="Payment slug is already taken")

    business_repo.update_slug(business.id, slug)
    db.commit()
    return SuccessResponse(success=True)


@router.get("/businesses/{business_id}/stats", response_model=DashboardStatsResponse)
def get_stats(business_id: str, db: Session = Depends(get_db)):
    """Dashboard totals derived from the business's applications"""
    business = load_business(db, business_id)
    stats = dashboard_stats(ApplicationRepository(db).list_by_business(business.id))

    return DashboardStatsResponse(
        totalPayments=stats.total_payments,
        successRate=stats.success_rate,
        pendingApprovals=stats.pending_approvals,
        failedPayments=stats.failed_payments,
    )


@router.get("/businesses/{business_id}/transactions", response_model=List[TransactionItem])
def get_transactions(
    business_id: str,
    limit: int = Query(5, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Most recent applications, summarized for the dashboard"""
    business = load_business(db, business_id)
    return ApplicationRepository(db).list_by_business(business.id, limit=limit)


@router.get("/businesses/{business_id}/applications", response_model=List[PaymentApplicationResponse])
def get_business_applications(
    business_id: str,
    status: Optional[ApplicationStatus] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Applications for a business, newest first"""
    business = load_business(db, business_id)
    return ApplicationRepository(db).list_by_business(
        business.id,
        status=status.value if status is not None else None,
        limit=limit,
    )


@router.get("/businesses/{business_id}/customers", response_model=List[CustomerResponse])
def get_customers(business_id: str, db: Session = Depends(get_db)):
    """
    Customer aggregates maintained as applications arrive.

    Each customer's tier uses the business's current thresholds, and
    TRUSTED requires min_history_for_trusted approved applications.
    """
    business = load_business(db, business_id)
    rules = RulesRepository(db).get_trust_rules(business.id)
    customers = CustomerRepository(db).list_by_business(business.id)
    db.commit()  # default rules may have been created on first read

    return [
        CustomerResponse(
            customer_email=c.email,
            customer_name=c.name,
            total_payments=c.total_payments,
            successful_payments=c.successful_payments,
            average_trust_score=c.average_trust_score,
            total_amount_paid=c.total_amount_paid,
            active_plans=c.active_plans,
            last_payment_date=c.last_payment_date,
            trust_tier=trust_tier_for_score(
                round(c.average_trust_score), rules, successful_payments=c.successful_payments
            ),
        )
        for c in customers
    ]
