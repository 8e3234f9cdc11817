"""SQLAlchemy ORM models for stored simulations"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Float, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NetYieldSimulation(Base):
    """Prospect submission; only the inputs are stored, never derived metrics"""

    __tablename__ = "net_yield_simulation"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    purchase_price = Column(Float, nullable=False)
    monthly_rent = Column(Float, nullable=False)
    annual_fee = Column(Float, nullable=False)
    email = Column(Text, nullable=False)
    # Microsecond timestamps keep newest-first ordering stable on SQLite
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
    )
