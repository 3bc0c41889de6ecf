"""Dependency injection for FastAPI endpoints"""

import random
import uuid
from fastapi import HTTPException, Request
from trustrail_gateway.config import settings
from trustrail_gateway.domain.trust import TrustEvaluator
from trustrail_gateway.infrastructure.clients.bank import BankClient

_evaluator = TrustEvaluator(
    rng=random.Random(settings.scoring_jitter_seed),
    jitter_max=settings.scoring_jitter_max,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_bank_client() -> BankClient:
    """Provide Bank API client instance"""
    return BankClient()


def get_trust_evaluator() -> TrustEvaluator:
    """Provide the process-wide trust evaluator"""
    return _evaluator


def parse_uuid(value: str, label: str = "ID") -> uuid.UUID:
    """Parse a path/body identifier, rejecting malformed values with 400"""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} format")
