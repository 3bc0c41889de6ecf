"""SQLAlchemy ORM models for businesses, rules, applications and derived records"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    String,
    Boolean,
    Float,
    DateTime,
    Date,
    Integer,
    ForeignKey,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship

from trustrail_gateway.domain.models import PaymentType

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; all DateTime columns store UTC without tzinfo"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Business(Base):
    """Registered business that receives payment applications"""

    __tablename__ = "businesses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    phone = Column(Text, nullable=False)
    industry = Column(Text, nullable=False)
    payment_slug = Column(Text, nullable=True, unique=True, index=True)
    verification_status = Column(String(16), nullable=False, default="pending")
    cac_certificate_url = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    payment_rules = relationship(
        "PaymentRule", back_populates="business", uselist=False, cascade="all, delete-orphan"
    )
    trust_rules = relationship(
        "TrustRule", back_populates="business", uselist=False, cascade="all, delete-orphan"
    )
    applications = relationship("PaymentApplication", back_populates="business", cascade="all, delete-orphan")


class PaymentRule(Base):
    """Instalment terms a business offers"""

    __tablename__ = "payment_rules"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    min_order_value = Column(Float, nullable=False, default=50_000)
    max_instalment_period = Column(Integer, nullable=False, default=6)
    down_payment_percentage = Column(Float, nullable=False, default=30)
    enable_fees = Column(Boolean, nullable=False, default=False)
    interest_rate = Column(Float, nullable=False, default=0)
    late_fee = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="payment_rules")


class TrustRule(Base):
    """Trust tier and auto-decision thresholds configured by a business"""

    __tablename__ = "trust_rules"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    trusted_min = Column(Integer, nullable=False)
    verified_min = Column(Integer, nullable=False)
    new_min = Column(Integer, nullable=False)
    restricted_min = Column(Integer, nullable=False)
    auto_approve_threshold = Column(Integer, nullable=False)
    auto_decline_threshold = Column(Integer, nullable=False)
    max_outstanding_balance = Column(Float, nullable=False)
    consecutive_failure_limit = Column(Integer, nullable=False)
    late_payment_penalty = Column(Integer, nullable=False)
    on_time_bonus = Column(Integer, nullable=False)
    min_history_for_trusted = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="trust_rules")


class PaymentApplication(Base):
    """Customer application, scored once at submission"""

    __tablename__ = "payment_applications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_name = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False, index=True)
    customer_phone = Column(Text, nullable=False)
    customer_bvn = Column(Text, nullable=True)
    service_description = Column(Text, nullable=True)
    payment_type = Column(String(16), nullable=False)
    total_amount = Column(Float, nullable=True)
    recurring_amount = Column(Float, nullable=True)
    commitment_months = Column(Integer, nullable=True)
    payment_frequency = Column(String(16), nullable=False, default="monthly")
    preferred_start_date = Column(Date, nullable=True)
    bank_name = Column(Text, nullable=True)
    account_number = Column(Text, nullable=True)
    account_name = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="under_review")
    trust_score = Column(Integer, nullable=False, default=50)
    trust_tier = Column(String(16), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="applications")
    schedule = relationship(
        "PaymentSchedule",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="PaymentSchedule.installment_number",
    )

    @property
    def amount(self) -> float:
        """Total for instalments, recurring charge for subscriptions"""
        if self.payment_type == PaymentType.INSTALMENT.value:
            return self.total_amount or 0
        return self.recurring_amount or 0


class Customer(Base):
    """Per-customer aggregate, updated every time an application is stored"""

    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("business_id", "email", name="uq_customers_business_email"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    trust_score = Column(Integer, nullable=False, default=50)
    total_payments = Column(Integer, nullable=False, default=0)
    successful_payments = Column(Integer, nullable=False, default=0)
    average_trust_score = Column(Float, nullable=False, default=0.0)
    total_amount_paid = Column(Float, nullable=False, default=0.0)
    active_plans = Column(Integer, nullable=False, default=0)
    last_payment_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class Notification(Base):
    """Event shown to a business in its dashboard"""

    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(40), nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    related_id = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)


class PaymentSchedule(Base):
    """Scheduled instalment of an approved INSTALMENT application"""

    __tablename__ = "payment_schedules"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    application_id = Column(
        UUID(as_uuid=True), ForeignKey("payment_applications.id", ondelete="CASCADE"), nullable=False
    )
    installment_number = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)
    due_date = Column(Date, nullable=False)
    paid_date = Column(Date, nullable=True)
    status = Column(String(16), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    application = relationship("PaymentApplication", back_populates="schedule")
