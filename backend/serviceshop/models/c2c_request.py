from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, String

from serviceshop.db import Base


class C2CRequest(Base):
    """Card-to-cash request."""

    __tablename__ = "c2c_requests"

    id = Column(String(32), primary_key=True)
    brand = Column(String(128), nullable=False)
    amount = Column(Float, nullable=False)
    name = Column(String(256), nullable=False)
    phone = Column(String(32), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
