from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BookingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
    id: str
    device_type: str
    date_slot: str
    description: str
    contact_phone: str
    status: str
    estimate: Optional[float] = None
    final_amount: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def booking_to_dict(b) -> dict:
    return BookingOut.model_validate(b).model_dump(mode="json", by_alias=True)
