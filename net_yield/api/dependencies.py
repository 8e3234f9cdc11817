"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from net_yield.infrastructure.database.session import get_db
from net_yield.infrastructure.database.repositories import SimulationRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_simulation_repository(db: Session = Depends(get_db)) -> SimulationRepository:
    """Provide repository bound to the request's database session"""
    return SimulationRepository(db)
