"""POST /v1/schedule-preview - stateless instalment schedule calculation"""

from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from trustrail_gateway.api.v1.schemas import SchedulePreviewRequest, SchedulePreviewResponse
from trustrail_gateway.api.dependencies import parse_uuid
from trustrail_gateway.config import settings
from trustrail_gateway.infrastructure.database.session import get_db
from trustrail_gateway.infrastructure.database.repositories import RulesRepository
from trustrail_gateway.domain.installments import schedule_for_rules
from trustrail_gateway.domain.models import PaymentRules
from trustrail_gateway.domain.exceptions import NotFoundError, ValidationError

router = APIRouter()

_RULE_OVERRIDES = ("down_payment_percentage", "max_instalment_period", "enable_fees", "interest_rate")


@router.post("/schedule-preview", response_model=SchedulePreviewResponse)
def preview_schedule(request_body: SchedulePreviewRequest, db: Session = Depends(get_db)):
    """
    Compute an instalment schedule without storing anything.

    Terms come from the business's payment rules (or the defaults when no
    business is given); any rule field present in the request overrides them.
    """
    try:
        if request_body.business_id is not None:
            rules = RulesRepository(db).get_payment_rules(parse_uuid(request_body.business_id, "business ID"))
        else:
            rules = PaymentRules()

        overrides = {
            name: getattr(request_body, name)
            for name in _RULE_OVERRIDES
            if getattr(request_body, name) is not None
        }
        rules = PaymentRules(**{**asdict(rules), **overrides})

        preview = schedule_for_rules(
            request_body.total_amount,
            rules,
            start_date=request_body.start_date,
            payment_frequency=request_body.payment_frequency.value,
            interest_method=settings.schedule_interest_method,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return asdict(preview)
