from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, String, Text

from serviceshop.db import Base


class Booking(Base):
    __tablename__ = "bookings"

    # ticket id, TF<year>-<8 chars>; never changes once issued
    id = Column(String(32), primary_key=True)
    device_type = Column(String(128), nullable=False)
    date_slot = Column(String(64), nullable=False)
    description = Column(Text, nullable=False)
    contact_phone = Column(String(32), nullable=False, index=True)
    status = Column(String(64), nullable=False, default="Pending")
    estimate = Column(Float, nullable=True)
    final_amount = Column(Float, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Booking id={self.id} status={self.status}>"
