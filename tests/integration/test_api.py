"""Integration tests for API endpoints"""

import pytest
from typing import Any, Dict
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from net_yield.infrastructure.database.models import Base, NetYieldSimulation
from net_yield.infrastructure.database.repositories import SimulationRepository
from net_yield.api.dependencies import get_simulation_repository


@pytest.fixture
def data_driven_payload(simulation_payload: Dict[str, Any]) -> Dict[str, Any]:
    return {**simulation_payload, "surface": 50, "bedrooms": "2", "location_score": 8, "data_driven": True}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "net_yield_simulation_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    """Test caller-supplied request ID is returned"""
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_create_simulation_baseline(client: TestClient, db: Session, simulation_payload: Dict[str, Any]):
    """Test POST /v1/simulations computes, stores inputs and returns result"""
    response = client.post("/v1/simulations", json=simulation_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["saved"] is True
    assert data["simulation_id"] is not None
    assert data["created_at"] is not None
    assert data["result"]["average_monthly_net_income"] == pytest.approx(858.3333333, rel=1e-9)
    assert data["result"]["monthly_net_return_pct"] == pytest.approx(0.4291666667, rel=1e-9)
    assert data["result"]["expected_monthly_net_income"] is None
    assert data["display"] == {
        "average_monthly_net_income": "$858.33",
        "monthly_net_return": "0.43%",
        "show_expected": False,
        "expected_monthly_net_income": None,
        "expected_monthly_net_return": None,
    }

    stored = db.query(NetYieldSimulation).all()
    assert len(stored) == 1
    assert stored[0].purchase_price == 200000
    assert stored[0].email == "prospect@example.com"


def test_create_simulation_data_driven(client: TestClient, data_driven_payload: Dict[str, Any]):
    """Test data-driven triple adds the expected income block"""
    response = client.post("/v1/simulations", json=data_driven_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["input"]["bedrooms"] == 2
    assert data["result"]["expected_monthly_net_income"] == pytest.approx(561.1, rel=0.02)
    assert data["display"]["show_expected"] is True
    assert data["display"]["expected_monthly_net_return"].endswith("%")


def test_create_simulation_partial_triple(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test two of three data-driven fields never produce an expected result"""
    response = client.post("/v1/simulations", json={**simulation_payload, "surface": 50, "bedrooms": 2})

    assert response.status_code == 201
    data = response.json()
    assert data["result"]["expected_monthly_net_income"] is None
    assert data["result"]["expected_monthly_net_return_pct"] is None
    assert data["display"]["show_expected"] is False


def test_create_simulation_data_driven_requires_triple(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test data_driven flag makes the triple mandatory"""
    response = client.post("/v1/simulations", json={**simulation_payload, "data_driven": True, "surface": 50})

    assert response.status_code == 400
    details = response.json()["details"]
    assert [(d["field"], d["code"]) for d in details] == [
        ("bedrooms", "REQUIRED_FIELD"),
        ("location_score", "REQUIRED_FIELD"),
    ]


def test_create_simulation_missing_fields(client: TestClient, db: Session):
    """Test missing fields are rejected before anything is stored"""
    response = client.post("/v1/simulations", json={"purchase_price": 200000})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Missing required fields"
    assert {d["field"] for d in data["details"]} == {"monthly_rent", "annual_fee", "email"}
    assert db.query(NetYieldSimulation).count() == 0


def test_create_simulation_non_positive_values(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test zero and negative values are rejected with their codes"""
    response = client.post(
        "/v1/simulations",
        json={**simulation_payload, "purchase_price": 0, "monthly_rent": -1200},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid input values"
    assert [(d["field"], d["code"]) for d in data["details"]] == [
        ("purchase_price", "ZERO_VALUE"),
        ("monthly_rent", "NEGATIVE_NUMBER"),
    ]


def test_create_simulation_invalid_email(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test malformed email is rejected"""
    response = client.post("/v1/simulations", json={**simulation_payload, "email": "a@b"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid email format"
    assert data["details"][0]["code"] == "INVALID_EMAIL"


def test_create_simulation_out_of_range_feature(client: TestClient, data_driven_payload: Dict[str, Any]):
    """Test data-driven ranges are enforced"""
    response = client.post("/v1/simulations", json={**data_driven_payload, "surface": 120.01, "bedrooms": 5})

    assert response.status_code == 400
    codes = [d["code"] for d in response.json()["details"]]
    assert codes == ["SURFACE_OUT_OF_RANGE", "BEDROOMS_OUT_OF_RANGE"]


def test_create_simulation_malformed_body(client: TestClient):
    """Test unparseable body returns 400 in the error shape"""
    response = client.post(
        "/v1/simulations",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Malformed request"
    assert data["message"]


def test_create_simulation_persistence_failure_keeps_result(
    client: TestClient, db: Session, simulation_payload: Dict[str, Any]
):
    """Test a failed write still returns the computed result"""
    Base.metadata.drop_all(bind=db.get_bind())

    response = client.post("/v1/simulations", json=simulation_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["saved"] is False
    assert data["simulation_id"] is None
    assert data["result"]["average_monthly_net_income"] == pytest.approx(858.3333333, rel=1e-9)
    assert data["display"]["monthly_net_return"] == "0.43%"


def test_preview_simulation_does_not_persist(client: TestClient, db: Session, data_driven_payload: Dict[str, Any]):
    """Test POST /v1/simulations/preview computes without storing"""
    response = client.post("/v1/simulations/preview", json=data_driven_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["saved"] is False
    assert data["display"]["show_expected"] is True
    assert db.query(NetYieldSimulation).count() == 0


def test_preview_simulation_rejects_invalid(client: TestClient):
    response = client.post("/v1/simulations/preview", json={"purchase_price": "abc"})

    assert response.status_code == 400
    details = {d["field"]: d["code"] for d in response.json()["details"]}
    assert details["purchase_price"] == "INVALID_NUMBER"


def test_list_simulations_newest_first(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test GET /v1/simulations orders by creation time, newest first"""
    client.post("/v1/simulations", json={**simulation_payload, "monthly_rent": 1000})
    client.post("/v1/simulations", json={**simulation_payload, "monthly_rent": 2000})

    response = client.get("/v1/simulations")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert [s["monthly_rent"] for s in data["simulations"]] == [2000, 1000]


def test_list_simulations_recomputes_identical_metrics(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test admin listing reproduces the metrics shown at submission"""
    payload = {**simulation_payload, "purchase_price": 187500.75, "monthly_rent": 935.5, "annual_fee": 420.25}
    created = client.post("/v1/simulations", json=payload).json()

    listed = client.get("/v1/simulations").json()["simulations"][0]

    assert listed["simulation_id"] == created["simulation_id"]
    assert listed["average_monthly_net_income"] == created["result"]["average_monthly_net_income"]
    assert listed["monthly_net_return_pct"] == created["result"]["monthly_net_return_pct"]


def test_list_simulations_limit(client: TestClient, simulation_payload: Dict[str, Any]):
    for rent in (900, 1000, 1100):
        client.post("/v1/simulations", json={**simulation_payload, "monthly_rent": rent})

    response = client.get("/v1/simulations?limit=2")

    assert response.status_code == 200
    assert response.json()["count"] == 2

    assert client.get("/v1/simulations?limit=0").status_code == 400


def test_list_simulations_empty(client: TestClient):
    response = client.get("/v1/simulations")

    assert response.status_code == 200
    assert response.json() == {"count": 0, "simulations": []}


@pytest.mark.parametrize("field", ["purchase_price", "monthly_rent", "annual_fee"])
def test_create_simulation_rejects_boolean_numbers(client: TestClient, simulation_payload: Dict[str, Any], field: str):
    """Test JSON true is not accepted as the number 1"""
    response = client.post("/v1/simulations/preview", json={**simulation_payload, field: True})

    assert response.status_code == 400
    details = {d["field"]: d["code"] for d in response.json()["details"]}
    assert details == {field: "INVALID_NUMBER"}


def test_create_simulation_rejects_boolean_bedrooms(client: TestClient, data_driven_payload: Dict[str, Any]):
    """Test JSON true never enables the data-driven block as one bedroom"""
    payload = {**data_driven_payload, "bedrooms": True, "data_driven": False}

    response = client.post("/v1/simulations", json=payload)

    assert response.status_code == 400
    details = {d["field"]: d["code"] for d in response.json()["details"]}
    assert details == {"bedrooms": "BEDROOMS_OUT_OF_RANGE"}


def test_create_simulation_unexpected_error(
    client: TestClient, db: Session, simulation_payload: Dict[str, Any]
):
    """Test unexpected repository errors return 500 in the error shape and store nothing"""

    class BrokenRepository(SimulationRepository):
        def create_simulation(self, simulation_input):
            raise RuntimeError("disk on fire")

    client.app.dependency_overrides[get_simulation_repository] = lambda: BrokenRepository(db)

    response = client.post("/v1/simulations", json=simulation_payload)

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "message": "Failed to save simulation",
        "details": [],
    }
    assert db.query(NetYieldSimulation).count() == 0


def test_created_at_matches_listing(client: TestClient, simulation_payload: Dict[str, Any]):
    """Test one record reports the same UTC timestamp on create and in the listing"""
    created = client.post("/v1/simulations", json=simulation_payload).json()

    listed = client.get("/v1/simulations").json()["simulations"][0]

    assert created["created_at"].endswith("+00:00")
    assert listed["created_at"] == created["created_at"]
