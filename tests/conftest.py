"""Pytest fixtures for testing"""

import random
import pytest
from datetime import date, timedelta
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from trustrail_gateway.api.main import create_app
from trustrail_gateway.api.dependencies import get_trust_evaluator
from trustrail_gateway.infrastructure.database.models import Base
from trustrail_gateway.infrastructure.database.session import get_db
from trustrail_gateway.domain.models import PaymentApplicationData, PaymentFrequency, PaymentType
from trustrail_gateway.domain.trust import TrustEvaluator


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and jitter-free scoring"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_trust_evaluator] = lambda: TrustEvaluator(rng=random.Random(0), jitter_max=0)
    return TestClient(app)


@pytest.fixture
def business(client: TestClient) -> dict:
    """A registered business with default rules"""
    response = client.post(
        "/v1/businesses/register",
        json={
            "business_name": "Lagos Auto Repairs",
            "email": "owner@lagosauto.ng",
            "phone": "+2348012345678",
            "industry": "automotive",
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def application_payload(business: dict) -> dict:
    """Valid INSTALMENT submission: 150k, no BVN, monthly -> score 70 (approved) without jitter"""
    return {
        "business_id": business["id"],
        "customer_name": "Adaeze Okafor",
        "customer_email": "adaeze@example.com",
        "customer_phone": "+2348098765432",
        "service_description": "Engine overhaul",
        "payment_type": "INSTALMENT",
        "total_amount": 150000,
        "payment_frequency": "monthly",
        "preferred_start_date": (date.today() + timedelta(days=1)).isoformat(),
        "bank_name": "GTBank",
        "account_number": "0123456789",
        "account_name": "Adaeze Okafor",
    }


@pytest.fixture
def instalment_data() -> PaymentApplicationData:
    """Domain-level INSTALMENT application"""
    return PaymentApplicationData(
        business_id="b1",
        customer_name="Tunde Bakare",
        customer_email="tunde@example.com",
        customer_phone="+2348011111111",
        payment_type=PaymentType.INSTALMENT,
        payment_frequency=PaymentFrequency.MONTHLY,
        preferred_start_date=date(2026, 1, 15),
        total_amount=75000,
        bank_name="Access Bank",
        account_number="1234567890",
        account_name="Tunde Bakare",
    )
