from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from serviceshop.db import Base


class CscBooking(Base):
    """Community-service-center appointment."""

    __tablename__ = "csc_bookings"

    id = Column(String(32), primary_key=True)
    service = Column(String(256), nullable=False)
    date = Column(String(64), nullable=False)
    name = Column(String(256), nullable=False)
    phone = Column(String(32), nullable=False)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
