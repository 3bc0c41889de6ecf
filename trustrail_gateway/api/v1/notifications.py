"""Business notification feed"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from trustrail_gateway.api.v1.businesses import load_business
from trustrail_gateway.api.v1.schemas import NotificationResponse, SuccessResponse
from trustrail_gateway.api.dependencies import parse_uuid
from trustrail_gateway.infrastructure.database.session import get_db
from trustrail_gateway.infrastructure.database.repositories import NotificationRepository
from trustrail_gateway.domain.exceptions import NotFoundError

router = APIRouter()


@router.get("/businesses/{business_id}/notifications", response_model=List[NotificationResponse])
def get_notifications(business_id: str, db: Session = Depends(get_db)):
    """Notifications for a business, newest first"""
    business = load_business(db, business_id)
    return NotificationRepository(db).list_by_business(business.id)


@router.put("/notifications/{notification_id}/read", response_model=SuccessResponse)
def mark_notification_as_read(notification_id: str, db: Session = Depends(get_db)):
    try:
        NotificationRepository(db).mark_as_read(parse_uuid(notification_id, "notification ID"))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    return SuccessResponse(success=True)
