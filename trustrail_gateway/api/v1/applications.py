"""POST /v1/payment-applications - score and store customer applications"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from trustrail_gateway.api.v1.schemas import (
    PaymentApplicationRequest,
    PaymentApplicationResponse,
    PaymentScheduleItem,
    PaymentScheduleResponse,
)
from trustrail_gateway.api.dependencies import get_request_id, get_trust_evaluator, parse_uuid
from trustrail_gateway.config import settings
from trustrail_gateway.infrastructure.database.session import get_db
from trustrail_gateway.infrastructure.database.repositories import (
    ApplicationRepository,
    BusinessRepository,
    CustomerRepository,
    NotificationRepository,
    RulesRepository,
)
from trustrail_gateway.domain.applications import normalize_bvn, validate_application
from trustrail_gateway.domain.installments import schedule_for_rules
from trustrail_gateway.domain.models import ApplicationStatus, PaymentApplicationData, PaymentType
from trustrail_gateway.domain.notifications import notification_for_application
from trustrail_gateway.domain.trust import TrustEvaluator
from trustrail_gateway.domain.exceptions import NotFoundError, ValidationError
from trustrail_gateway.infrastructure.observability.metrics import record_application, record_notification
from trustrail_gateway.infrastructure.observability.logging import log_application_decision

router = APIRouter()


@router.post("/payment-applications", response_model=PaymentApplicationResponse, status_code=201)
def submit_application(
    request_body: PaymentApplicationRequest,
    request: Request,
    db: Session = Depends(get_db),
    evaluator: TrustEvaluator = Depends(get_trust_evaluator),
):
    """
    Score a customer application and record the outcome.

    Flow:
    1. Load the owning business with its trust and payment rules
    2. Validate fields required by the payment type
    3. Compute trust score, decision and tier
    4. Persist application, customer aggregate and notification
    5. Store the instalment schedule for approved INSTALMENT plans
    6. Return the scored application
    """
    start_time = time.time()
    request_id = get_request_id(request)
    business_id = parse_uuid(request_body.business_id, "business ID")

    try:
        # 1. Business and its rules
        BusinessRepository(db).get_by_id(business_id)
        rules_repo = RulesRepository(db)
        trust_rules = rules_repo.get_trust_rules(business_id)
        payment_rules = rules_repo.get_payment_rules(business_id)

        # 2. Validate
        data = PaymentApplicationData(
            **request_body.model_dump(exclude={"business_id", "customer_bvn"}),
            business_id=str(business_id),
            customer_bvn=normalize_bvn(request_body.customer_bvn),
        )
        validate_application(data, payment_rules)

        # 3. Score
        assessment = evaluator.evaluate(data, trust_rules)

        # 4. Persist application and derived records
        application_repo = ApplicationRepository(db)
        db_application = application_repo.create_application(data, assessment)
        CustomerRepository(db).record_application(db_application)

        draft = notification_for_application(data.customer_name, assessment.status)
        NotificationRepository(db).create_notification(business_id, draft, related_id=db_application.id)

        # 5. Repayment schedule for approved instalment plans
        if assessment.status == ApplicationStatus.APPROVED and data.payment_type == PaymentType.INSTALMENT:
            schedule = schedule_for_rules(
                data.total_amount,
                payment_rules,
                start_date=data.preferred_start_date,
                payment_frequency=data.payment_frequency.value,
                interest_method=settings.schedule_interest_method,
            )
            application_repo.create_schedule(db_application, schedule)

        db.commit()
        db.refresh(db_application)

        # Record metrics and logs
        duration_ms = (time.time() - start_time) * 1000
        record_application(
            assessment.status.value, data.payment_type.value, assessment.tier.value, assessment.trust_score
        )
        record_notification(draft.type)
        log_application_decision(
            request_id,
            str(business_id),
            str(db_application.id),
            assessment.status.value,
            assessment.trust_score,
            assessment.tier.value,
            duration_ms,
        )

        return db_application

    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except ValidationError as e:
        db.rollback()
        logging.warning(f"Invalid application: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/payment-applications/{application_id}", response_model=PaymentApplicationResponse)
def get_application(application_id: str, db: Session = Depends(get_db)):
    """Retrieve a scored application"""
    try:
        return ApplicationRepository(db).get_by_id(parse_uuid(application_id, "application ID"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/payment-applications/{application_id}/schedule", response_model=PaymentScheduleResponse)
def get_application_schedule(application_id: str, db: Session = Depends(get_db)):
    """
    Retrieve the stored instalment schedule.

    Returns:
        Instalments in order; empty unless the application is an approved INSTALMENT plan
    """
    try:
        application = ApplicationRepository(db).get_by_id(parse_uuid(application_id, "application ID"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return PaymentScheduleResponse(
        application_id=application.id,
        installments=[PaymentScheduleItem.model_validate(row) for row in application.schedule],
    )
