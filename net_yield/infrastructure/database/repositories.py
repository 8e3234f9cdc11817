"""Data access layer for stored simulations"""

from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from net_yield.infrastructure.database.models import NetYieldSimulation
from net_yield.domain.models import SimulationInput
from net_yield.domain.exceptions import SimulationPersistenceError


class SimulationRepository:
    """Repository for prospect simulations"""

    def __init__(self, db: Session):
        self.db = db

    def create_simulation(self, simulation_input: SimulationInput) -> NetYieldSimulation:
        """
        Persist the four submitted input fields.

        Data-driven fields and derived metrics are not stored.

        Raises:
            SimulationPersistenceError: On any database error
        """
        db_simulation = NetYieldSimulation(
            purchase_price=simulation_input.purchase_price,
            monthly_rent=simulation_input.monthly_rent,
            annual_fee=simulation_input.annual_fee,
            email=simulation_input.email.strip().lower(),
        )
        try:
            self.db.add(db_simulation)
            self.db.flush()  # Get ID without committing
        except SQLAlchemyError as e:
            raise SimulationPersistenceError(f"Failed to save simulation: {e}") from e
        return db_simulation

    def list_simulations(self, limit: Optional[int] = None) -> List[NetYieldSimulation]:
        """Fetch stored simulations, newest first"""
        query = self.db.query(NetYieldSimulation).order_by(NetYieldSimulation.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        try:
            return query.all()
        except SQLAlchemyError as e:
            raise SimulationPersistenceError(f"Failed to load simulations: {e}") from e
