from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from serviceshop.db import Base


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(32), primary_key=True)
    name = Column(String(256), nullable=False)
    email = Column(String(256), nullable=False)
    phone = Column(String(32), nullable=False, default="")
    subject = Column(String(512), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
