from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from serviceshop.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def list(self, include_hidden: bool = False) -> List[Product]:
        """
        Products ordered by (category, title). Hidden products are only
        included for admin listings.
        """
        query = self.db.query(Product)
        if not include_hidden:
            query = query.filter(
                or_(Product.hide_product == False, Product.hide_product.is_(None))  # noqa: E712
            )
        return query.order_by(Product.category, Product.title).all()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0
