from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from serviceshop.db import Base


class Setting(Base):
    """Editable site text keyed by name (e.g. "announcement")."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(128), unique=True, nullable=False, index=True)
    text = Column(Text, nullable=False, default="")
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
