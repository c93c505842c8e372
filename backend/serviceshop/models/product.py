import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text

from serviceshop.db import Base


class ProductCategory(str, enum.Enum):
    COMPUTERS = "computers"
    MOBILES = "mobiles"
    ACCESSORIES = "accessories"
    OTHER = "other"


MAX_OFFER_PERCENTAGE = 90


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    # short human code; not enforced unique here
    code = Column(String(64), nullable=True, index=True)
    title = Column(String(256), nullable=False)
    category = Column(String(32), nullable=False, default=ProductCategory.COMPUTERS.value)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    offer_percentage = Column(Float, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    hide_product = Column(Boolean, nullable=False, default=False)
    # images[0] is the primary display image
    images = Column(JSON, nullable=False, default=list)
    offer_expiry = Column(DateTime, nullable=True)
    # append-only list of {"price", "offerPercentage", "changedAt"}
    price_history = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<Product id={self.id} title={self.title} price={self.price}>"
