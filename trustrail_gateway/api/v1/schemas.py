"""Pydantic schemas for API request/response validation"""

import uuid
from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import List, Optional

from trustrail_gateway.domain.models import ApplicationStatus, PaymentFrequency, PaymentType, TrustTier


# Payment applications

class PaymentApplicationRequest(BaseModel):
    """Request body for POST /v1/payment-applications"""

    business_id: str = Field(..., min_length=1, description="Owning business identifier")
    customer_name: str = Field(..., min_length=1)
    customer_email: str = Field(..., min_length=3)
    customer_phone: str = Field(..., min_length=1)
    customer_bvn: Optional[str] = Field(None, description="Bank verification number (11 digits)")
    service_description: Optional[str] = None
    payment_type: PaymentType
    total_amount: Optional[float] = Field(None, description="Required for INSTALMENT")
    recurring_amount: Optional[float] = Field(None, description="Required for SUBSCRIPTION")
    commitment_months: Optional[int] = Field(None, description="Required for SUBSCRIPTION")
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    preferred_start_date: Optional[date] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None


class PaymentApplicationResponse(BaseModel):
    """Stored application with its trust score and decision"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    business_id: uuid.UUID
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_bvn: Optional[str] = None
    service_description: Optional[str] = None
    payment_type: PaymentType
    total_amount: Optional[float] = None
    recurring_amount: Optional[float] = None
    commitment_months: Optional[int] = None
    payment_frequency: PaymentFrequency
    preferred_start_date: Optional[date] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None
    status: ApplicationStatus
    trust_score: int
    trust_tier: Optional[TrustTier] = None
    created_at: datetime
    updated_at: datetime


class PaymentScheduleItem(BaseModel):
    """Persisted instalment of an approved plan"""

    model_config = ConfigDict(from_attributes=True)

    installment_number: int
    amount: float
    due_date: date
    paid_date: Optional[date] = None
    status: str = "pending"


class PaymentScheduleResponse(BaseModel):
    """Response for GET /v1/payment-applications/{id}/schedule"""

    application_id: uuid.UUID
    installments: List[PaymentScheduleItem]


# Schedule preview

class SchedulePreviewRequest(BaseModel):
    """
    Request body for POST /v1/schedule-preview.

    Rule fields left unset come from the business's stored payment rules
    when business_id is given, otherwise from the defaults.
    """

    total_amount: float = Field(..., gt=0)
    start_date: date
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    business_id: Optional[str] = None
    down_payment_percentage: Optional[float] = Field(None, ge=0, le=100)
    max_instalment_period: Optional[int] = Field(None, ge=1)
    enable_fees: Optional[bool] = None
    interest_rate: Optional[float] = Field(None, ge=0)


class ScheduleEntrySchema(BaseModel):
    number: int
    date: date
    amount: float


class SchedulePreviewResponse(BaseModel):
    down_payment: float
    installment_amount: float
    num_installments: int
    total_interest: float
    total: float
    schedule: List[ScheduleEntrySchema]


# Businesses

class BusinessRegisterRequest(BaseModel):
    """Request body for POST /v1/businesses/register"""

    business_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    industry: str = Field(..., min_length=1)


class BusinessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    business_name: str
    email: str
    phone: str
    industry: str
    payment_slug: Optional[str] = None
    verification_status: str
    cac_certificate_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SlugUpdateRequest(BaseModel):
    slug: str = Field(..., min_length=1)


class SuccessResponse(BaseModel):
    success: bool


class DashboardStatsResponse(BaseModel):
    """Response for GET /v1/businesses/{id}/stats"""

    totalPayments: int
    successRate: int
    pendingApprovals: int
    failedPayments: int


class TransactionItem(BaseModel):
    """Recent application shown as a dashboard transaction"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    customer_name: str
    customer_email: str
    service_description: Optional[str] = None
    total_amount: Optional[float] = None
    recurring_amount: Optional[float] = None
    payment_type: PaymentType
    status: ApplicationStatus
    trust_score: int
    created_at: datetime


class CustomerResponse(BaseModel):
    """Aggregated customer statistics"""

    customer_email: str
    customer_name: str
    total_payments: int
    successful_payments: int
    average_trust_score: float
    total_amount_paid: float
    active_plans: int
    last_payment_date: Optional[datetime] = None
    trust_tier: TrustTier


# Rules

class TrustRulesSchema(BaseModel):
    """Trust rules as read and written by businesses"""

    trusted_min: int = Field(..., ge=0, le=100)
    verified_min: int = Field(..., ge=0, le=100)
    new_min: int = Field(..., ge=0, le=100)
    restricted_min: int = Field(..., ge=0, le=100)
    auto_approve_threshold: int = Field(..., ge=0, le=100)
    auto_decline_threshold: int = Field(..., ge=0, le=100)
    max_outstanding_balance: float = Field(..., ge=0)
    consecutive_failure_limit: int = Field(..., ge=1)
    late_payment_penalty: int = Field(..., ge=0)
    on_time_bonus: int = Field(..., ge=0)
    min_history_for_trusted: int = Field(..., ge=0)


class TrustRulesResponse(TrustRulesSchema):
    business_id: uuid.UUID


class TierPolicyResponse(BaseModel):
    """Response for GET /v1/businesses/{id}/trust-tier"""

    score: int
    tier: TrustTier
    down_payment_percentage: Optional[int] = None
    description: str


class PaymentRulesSchema(BaseModel):
    min_order_value: float = Field(..., ge=0)
    max_instalment_period: int = Field(..., ge=1)
    down_payment_percentage: float = Field(..., ge=0, le=100)
    enable_fees: bool = False
    interest_rate: float = Field(0, ge=0)
    late_fee: float = Field(0, ge=0)


class PaymentRulesResponse(PaymentRulesSchema):
    business_id: uuid.UUID


# Notifications

class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    business_id: uuid.UUID
    type: str
    title: str
    message: str
    read: bool
    created_at: datetime
    related_id: Optional[uuid.UUID] = None


# Bank verification

class BankVerificationRequest(BaseModel):
    bank_code: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)


class BankVerificationResponse(BaseModel):
    success: bool
    account_name: Optional[str] = None
    error: Optional[str] = None
