from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from serviceshop.config import Settings, settings as default_settings
from serviceshop.errors import ValidationError
from serviceshop.models.c2c_request import C2CRequest
from serviceshop.models.contact_message import ContactMessage
from serviceshop.models.csc_booking import CscBooking
from serviceshop.repositories.record_repo import RecordRepository
from serviceshop.utils import identifiers
from serviceshop.utils.fields import missing_fields, to_number
from serviceshop.utils.log import get_logger
from serviceshop.utils.transactions import write_transaction

log = get_logger("serviceshop.intake", "INTAKE")


def _require(given: Dict):
    missing = missing_fields(given, given)
    if missing:
        raise ValidationError("Missing fields", {k: "required" for k in missing})


class IntakeService:
    """Write-once customer submissions: card-to-cash, CSC bookings, contact messages."""

    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings
        self.c2c = RecordRepository(db, C2CRequest)
        self.csc = RecordRepository(db, CscBooking)
        self.contacts = RecordRepository(db, ContactMessage)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _save(self, repo: RecordRepository, record):
        with write_transaction(self.db):
            repo.add(record)
        log.info("%s created id=%s", type(record).__name__, record.id)
        return record

    def create_c2c(self, brand, amount, name, phone) -> C2CRequest:
        _require({"brand": brand, "amount": amount, "name": name, "phone": phone})
        record = C2CRequest(
            id=identifiers.generate(identifiers.C2C_PREFIX),
            brand=brand,
            amount=to_number(amount, "amount"),
            name=name,
            phone=phone,
            created_at=self._now(),
        )
        return self._save(self.c2c, record)

    def create_csc(self, service, date, name, phone, notes: Optional[str] = None) -> CscBooking:
        _require({"service": service, "date": date, "name": name, "phone": phone})
        record = CscBooking(
            id=identifiers.generate(identifiers.CSC_PREFIX),
            service=service,
            date=date,
            name=name,
            phone=phone,
            notes=notes or "",
            created_at=self._now(),
        )
        return self._save(self.csc, record)

    def create_contact(self, name, email, subject, message, phone: Optional[str] = None) -> ContactMessage:
        _require({"name": name, "email": email, "subject": subject, "message": message})
        record = ContactMessage(
            id=identifiers.generate(identifiers.CONTACT_PREFIX),
            name=name,
            email=email,
            phone=phone or "",
            subject=subject,
            message=message,
            created_at=self._now(),
        )
        return self._save(self.contacts, record)

    def recent_c2c(self) -> List[C2CRequest]:
        return self.c2c.recent(self.settings.ADMIN_LIST_LIMIT)

    def recent_csc(self) -> List[CscBooking]:
        return self.csc.recent(self.settings.ADMIN_LIST_LIMIT)

    def recent_contacts(self) -> List[ContactMessage]:
        return self.contacts.recent(self.settings.ADMIN_LIST_LIMIT)
