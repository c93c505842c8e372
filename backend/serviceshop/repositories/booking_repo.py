from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from serviceshop.models.booking import Booking


class BookingRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, booking_id: str) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def first_by_phone(self, phone: str) -> Optional[Booking]:
        # several bookings may share a phone; the oldest one wins
        return (
            self.db.query(Booking)
            .filter(Booking.contact_phone == phone)
            .order_by(Booking.created_at)
            .first()
        )

    def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self.db.flush()
        return booking

    def recent(self, limit: int) -> List[Booking]:
        return self.db.query(Booking).order_by(Booking.created_at.desc()).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count(Booking.id)).scalar() or 0
