"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class PaymentType(str, Enum):
    INSTALMENT = "INSTALMENT"
    SUBSCRIPTION = "SUBSCRIPTION"


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"
    DAILY = "daily"


class ApplicationStatus(str, Enum):
    APPROVED = "approved"
    UNDER_REVIEW = "under_review"
    DECLINED = "declined"


class TrustTier(str, Enum):
    TRUSTED = "TRUSTED"
    VERIFIED = "VERIFIED"
    NEW = "NEW"
    RESTRICTED = "RESTRICTED"
    DEFAULTED = "DEFAULTED"


@dataclass
class TrustRuleConfig:
    """Per-business thresholds for trust tiers and approval decisions"""

    trusted_min: int = 80
    verified_min: int = 60
    new_min: int = 40
    restricted_min: int = 20
    auto_approve_threshold: int = 70
    auto_decline_threshold: int = 40
    max_outstanding_balance: float = 1_000_000
    consecutive_failure_limit: int = 3
    late_payment_penalty: int = 5
    on_time_bonus: int = 3
    min_history_for_trusted: int = 6


@dataclass
class PaymentRules:
    """Per-business instalment terms used for schedule previews"""

    min_order_value: float = 50_000
    max_instalment_period: int = 6
    down_payment_percentage: float = 30
    enable_fees: bool = False
    interest_rate: float = 0
    late_fee: float = 0


@dataclass
class PaymentApplicationData:
    """Customer submission as received from the payment form"""

    business_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    payment_type: PaymentType
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    preferred_start_date: Optional[date] = None
    customer_bvn: Optional[str] = None
    service_description: Optional[str] = None
    total_amount: Optional[float] = None  # INSTALMENT
    recurring_amount: Optional[float] = None  # SUBSCRIPTION
    commitment_months: Optional[int] = None  # SUBSCRIPTION
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None


@dataclass
class ApplicationSignals:
    """Inputs the trust score is computed from"""

    has_bvn: bool
    amount: float
    payment_frequency: str


@dataclass
class TrustAssessment:
    """Output of trust evaluation"""

    trust_score: int
    status: ApplicationStatus
    tier: TrustTier
    jitter: int


@dataclass
class TierPolicy:
    """Display/policy meaning of a trust tier"""

    tier: TrustTier
    down_payment_percentage: Optional[int]  # None: no instalments offered
    description: str


@dataclass
class ScheduleEntry:
    """Single payment in an instalment schedule"""

    number: int
    date: date
    amount: float


@dataclass
class InstallmentSchedule:
    """Preview of an instalment plan"""

    down_payment: float
    installment_amount: float
    num_installments: int
    total_interest: float
    total: float
    schedule: List[ScheduleEntry] = field(default_factory=list)


@dataclass
class ApplicationOutcome:
    """Scored application as seen by customer aggregation"""

    customer_email: str
    customer_name: str
    amount: float
    status: str
    trust_score: int
    created_at: datetime
    customer_phone: Optional[str] = None


@dataclass
class CustomerSummary:
    """Aggregated view of one customer's applications with a business"""

    customer_email: str
    customer_name: str
    total_payments: int = 0
    successful_payments: int = 0
    average_trust_score: float = 0.0
    total_amount_paid: float = 0.0
    active_plans: int = 0
    last_payment_date: Optional[datetime] = None
    customer_phone: Optional[str] = None


@dataclass
class DashboardStats:
    """Headline numbers for a business dashboard"""

    total_payments: int
    success_rate: int
    pending_approvals: int
    failed_payments: int


@dataclass
class NotificationDraft:
    """Notification content derived from an application outcome"""

    type: str
    title: str
    message: str


@dataclass
class BankVerification:
    """Result of resolving an account name from bank code and account number"""

    success: bool
    account_name: Optional[str] = None
    error: Optional[str] = None
