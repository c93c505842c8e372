from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from serviceshop.config import Settings, settings as default_settings
from serviceshop.errors import NotFound, ValidationError
from serviceshop.models.booking import Booking
from serviceshop.repositories.booking_repo import BookingRepository
from serviceshop.utils import identifiers
from serviceshop.utils.fields import FieldInput, missing_fields, to_number
from serviceshop.utils.log import get_logger
from serviceshop.utils.transactions import write_transaction

log = get_logger("serviceshop.booking", "BOOKING")


class BookingService:
    """Repair-booking intake, ticket tracking and admin updates."""

    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings
        self.repo = BookingRepository(db)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def book(self, device_type: str, date_slot: str, description: str, contact_phone: str) -> Booking:
        given = {
            "device_type": device_type,
            "date_slot": date_slot,
            "description": description,
            "contact_phone": contact_phone,
        }
        missing = missing_fields(given, given)
        if missing:
            raise ValidationError("Missing fields", {k: "required" for k in missing})

        now = self._now()
        booking = Booking(
            id=identifiers.ticket_id(),
            device_type=str(device_type),
            date_slot=str(date_slot),
            description=str(description),
            contact_phone=str(contact_phone),
            status="Pending",
            estimate=None,
            final_amount=None,
            created_at=now,
            updated_at=now,
        )
        with write_transaction(self.db):
            self.repo.add(booking)
        log.info("booking created id=%s", booking.id)
        return booking

    def track(self, query: Optional[str]) -> Optional[Booking]:
        """
        Resolve a ticket id or a phone number to a booking.

        Anything starting TF<4 digits>- (any case) is looked up as a ticket id,
        uppercased. Everything else is an exact phone match, no reformatting.
        Returns None when nothing matches.
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Phone or Ticket ID required", {"phone": "required"})

        if identifiers.looks_like_ticket(query):
            return self.repo.get(query.upper())
        return self.repo.first_by_phone(query)

    def list_recent(self, limit: Optional[int] = None) -> List[Booking]:
        return self.repo.recent(limit or self.settings.ADMIN_LIST_LIMIT)

    def update(self, booking_id: str, fields: Dict) -> Booking:
        """
        Admin update. `status` is only applied when non-empty. `estimate` and
        `finalAmount` are always written: missing, null or "" store None.
        """
        status = fields.get("status")

        with write_transaction(self.db):
            booking = self.repo.get(booking_id)
            if not booking:
                raise NotFound("Booking not found")

            amounts = {}
            for key, attr in (("estimate", "estimate"), ("finalAmount", "final_amount")):
                value_in = FieldInput.read(fields, key)
                amounts[attr] = to_number(value_in.value, key) if value_in.has_value else None

            if status:
                booking.status = str(status)
            for attr, value in amounts.items():
                setattr(booking, attr, value)
            booking.updated_at = self._now()
            self.db.flush()

        log.info("booking %s updated status=%s", booking_id, booking.status)
        return booking
