"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from net_yield.api.main import create_app
from net_yield.infrastructure.database.models import Base
from net_yield.infrastructure.database.session import get_db
from net_yield.domain.models import SimulationInput


# Test database
TEST_DATABASE_URL = "sqlite:///./test_net_yield.db"
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
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def baseline_input() -> SimulationInput:
    """200k purchase, 1200/month rent, 500/year fee"""
    return SimulationInput(
        purchase_price=200000.0,
        monthly_rent=1200.0,
        annual_fee=500.0,
        email="prospect@example.com",
    )


@pytest.fixture
def data_driven_input() -> SimulationInput:
    """Baseline input plus a 50 m², 2 bedroom property with location score 8"""
    return SimulationInput(
        purchase_price=200000.0,
        monthly_rent=1200.0,
        annual_fee=500.0,
        email="prospect@example.com",
        surface=50.0,
        bedrooms=2,
        location_score=8.0,
    )


@pytest.fixture
def simulation_payload() -> Dict[str, Any]:
    """Valid request body for POST /v1/simulations"""
    return {
        "purchase_price": 200000,
        "monthly_rent": 1200,
        "annual_fee": 500,
        "email": "prospect@example.com",
    }
