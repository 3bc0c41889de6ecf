"""Data access layer for TrustRail entities"""

import uuid
from dataclasses import asdict, fields
from typing import List, Optional
from sqlalchemy.orm import Session
from trustrail_gateway.infrastructure.database.models import (
    Business,
    Customer,
    Notification,
    PaymentApplication,
    PaymentRule,
    PaymentSchedule,
    TrustRule,
    utcnow,
)
from trustrail_gateway.domain.customers import fold_application
from trustrail_gateway.domain.exceptions import NotFoundError
from trustrail_gateway.domain.models import (
    InstallmentSchedule,
    NotificationDraft,
    PaymentApplicationData,
    PaymentRules,
    TrustAssessment,
    TrustRuleConfig,
)


class BusinessRepository:
    """Repository for businesses"""

    def __init__(self, db: Session):
        self.db = db

    def create_business(
        self,
        business_name: str,
        email: str,
        phone: str,
        industry: str,
        payment_slug: str,
    ) -> Business:
        """Persist a business together with default payment and trust rules"""
        db_business = Business(
            business_name=business_name,
            email=email,
            phone=phone,
            industry=industry,
            payment_slug=payment_slug,
        )
        db_business.payment_rules = PaymentRule(**asdict(PaymentRules()))
        db_business.trust_rules = TrustRule(**asdict(TrustRuleConfig()))
        self.db.add(db_business)
        self.db.flush()
        return db_business

    def get_by_id(self, business_id: uuid.UUID) -> Business:
        business = self.db.get(Business, business_id)
        if business is None:
            raise NotFoundError("Business not found")
        return business

    def get_by_slug(self, slug: str) -> Business:
        business = self.db.query(Business).filter(Business.payment_slug == slug).first()
        if business is None:
            raise NotFoundError("Business not found")
        return business

    def get_by_email(self, email: str) -> Business:
        business = self.db.query(Business).filter(Business.email == email).first()
        if business is None:
            raise NotFoundError("Business not found")
        return business

    def email_exists(self, email: str) -> bool:
        return self.db.query(Business.id).filter(Business.email == email).first() is not None

    def slug_taken(self, slug: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        query = self.db.query(Business.id).filter(Business.payment_slug == slug)
        if exclude_id is not None:
            query = query.filter(Business.id != exclude_id)
        return query.first() is not None

    def update_slug(self, business_id: uuid.UUID, slug: str) -> Business:
        business = self.get_by_id(business_id)
        business.payment_slug = slug
        self.db.flush()
        return business


class RulesRepository:
    """Repository for per-business trust rules and payment rules"""

    def __init__(self, db: Session):
        self.db = db

    def get_trust_rules(self, business_id: uuid.UUID) -> TrustRuleConfig:
        """Stored trust rules, creating the canonical defaults on first access"""
        row = self._trust_rule_row(business_id)
        return TrustRuleConfig(**{f.name: getattr(row, f.name) for f in fields(TrustRuleConfig)})

    def save_trust_rules(self, business_id: uuid.UUID, rules: TrustRuleConfig) -> TrustRuleConfig:
        row = self._trust_rule_row(business_id)
        for name, value in asdict(rules).items():
            setattr(row, name, value)
        self.db.flush()
        return rules

    def get_payment_rules(self, business_id: uuid.UUID) -> PaymentRules:
        row = self._payment_rule_row(business_id)
        return PaymentRules(**{f.name: getattr(row, f.name) for f in fields(PaymentRules)})

    def save_payment_rules(self, business_id: uuid.UUID, rules: PaymentRules) -> PaymentRules:
        row = self._payment_rule_row(business_id)
        for name, value in asdict(rules).items():
            setattr(row, name, value)
        self.db.flush()
        return rules

    def _trust_rule_row(self, business_id: uuid.UUID) -> TrustRule:
        business = BusinessRepository(self.db).get_by_id(business_id)
        if business.trust_rules is None:
            business.trust_rules = TrustRule(**asdict(TrustRuleConfig()))
            self.db.flush()
        return business.trust_rules

    def _payment_rule_row(self, business_id: uuid.UUID) -> PaymentRule:
        business = BusinessRepository(self.db).get_by_id(business_id)
        if business.payment_rules is None:
            business.payment_rules = PaymentRule(**asdict(PaymentRules()))
            self.db.flush()
        return business.payment_rules


class ApplicationRepository:
    """Repository for payment applications and their schedules"""

    def __init__(self, db: Session):
        self.db = db

    def create_application(
        self,
        data: PaymentApplicationData,
        assessment: TrustAssessment,
    ) -> PaymentApplication:
        """Persist a scored application"""
        db_application = PaymentApplication(
            business_id=uuid.UUID(str(data.business_id)),
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            customer_bvn=data.customer_bvn,
            service_description=data.service_description,
            payment_type=data.payment_type.value,
            total_amount=data.total_amount,
            recurring_amount=data.recurring_amount,
            commitment_months=data.commitment_months,
            payment_frequency=data.payment_frequency.value,
            preferred_start_date=data.preferred_start_date,
            bank_name=data.bank_name,
            account_number=data.account_number,
            account_name=data.account_name,
            status=assessment.status.value,
            trust_score=assessment.trust_score,
            trust_tier=assessment.tier.value,
            created_at=utcnow(),
        )
        self.db.add(db_application)
        self.db.flush()  # Get ID without committing
        return db_application

    def create_schedule(self, application: PaymentApplication, schedule: InstallmentSchedule) -> List[PaymentSchedule]:
        """Store the instalments of an approved plan"""
        rows = [
            PaymentSchedule(
                application_id=application.id,
                installment_number=entry.number,
                amount=entry.amount,
                due_date=entry.date,
            )
            for entry in schedule.schedule
        ]
        self.db.add_all(rows)
        self.db.flush()
        return rows

    def get_by_id(self, application_id: uuid.UUID) -> PaymentApplication:
        application = self.db.get(PaymentApplication, application_id)
        if application is None:
            raise NotFoundError("Payment application not found")
        return application

    def list_by_business(
        self,
        business_id: uuid.UUID,
        status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[PaymentApplication]:
        """Applications for a business, newest first"""
        query = self.db.query(PaymentApplication).filter(PaymentApplication.business_id == business_id)
        if status is not None:
            query = query.filter(PaymentApplication.status == status)
        query = query.order_by(PaymentApplication.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()


class CustomerRepository:
    """Repository for incrementally maintained customer aggregates"""

    def __init__(self, db: Session):
        self.db = db

    def record_application(self, application: PaymentApplication) -> Customer:
        """Fold a newly stored application into its customer's aggregate"""
        customer = (
            self.db.query(Customer)
            .filter(
                Customer.business_id == application.business_id,
                Customer.email == application.customer_email,
            )
            .first()
        )
        if customer is None:
            customer = Customer(
                business_id=application.business_id,
                email=application.customer_email,
                name=application.customer_name,
                phone=application.customer_phone,
                total_payments=0,
                successful_payments=0,
                average_trust_score=0.0,
                total_amount_paid=0.0,
                active_plans=0,
            )
            self.db.add(customer)

        fold_application(customer, application)
        customer.trust_score = round(customer.average_trust_score)
        self.db.flush()
        return customer

    def list_by_business(self, business_id: uuid.UUID) -> List[Customer]:
        return (
            self.db.query(Customer)
            .filter(Customer.business_id == business_id)
            .order_by(Customer.created_at)
            .all()
        )


class NotificationRepository:
    """Repository for business notifications"""

    def __init__(self, db: Session):
        self.db = db

    def create_notification(
        self,
        business_id: uuid.UUID,
        draft: NotificationDraft,
        related_id: Optional[uuid.UUID] = None,
    ) -> Notification:
        db_notification = Notification(
            business_id=business_id,
            type=draft.type,
            title=draft.title,
            message=draft.message,
            related_id=related_id,
            created_at=utcnow(),
        )
        self.db.add(db_notification)
        self.db.flush()
        return db_notification

    def list_by_business(self, business_id: uuid.UUID) -> List[Notification]:
        """Notifications for a business, newest first"""
        return (
            self.db.query(Notification)
            .filter(Notification.business_id == business_id)
            .order_by(Notification.created_at.desc())
            .all()
        )

    def mark_as_read(self, notification_id: uuid.UUID) -> Notification:
        notification = self.db.get(Notification, notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        notification.read = True
        self.db.flush()
        return notification
