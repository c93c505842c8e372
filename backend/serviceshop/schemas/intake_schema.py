# Read-side shapes for the write-once intake records.
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class C2CRequestOut(BaseModel):
    model_config = _config
    id: str
    brand: str
    amount: float
    name: str
    phone: str
    created_at: Optional[datetime] = None


class CscBookingOut(BaseModel):
    model_config = _config
    id: str
    service: str
    date: str
    name: str
    phone: str
    notes: str = ""
    created_at: Optional[datetime] = None


class ContactMessageOut(BaseModel):
    model_config = _config
    id: str
    name: str
    email: str
    phone: str = ""
    subject: str
    message: str
    created_at: Optional[datetime] = None


class SettingOut(BaseModel):
    model_config = _config
    key: str
    text: str = ""
    updated_at: Optional[datetime] = None


def to_dict(schema, obj) -> dict:
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)
