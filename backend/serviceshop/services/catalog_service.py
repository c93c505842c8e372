import os
import tempfile
from datetime import datetime, timezone
from typing import Any, Dict, List

from filelock import FileLock, Timeout
from sqlalchemy.orm import Session

from serviceshop.config import Settings, settings as default_settings
from serviceshop.errors import NotFound, StoreError, ValidationError
from serviceshop.models.product import MAX_OFFER_PERCENTAGE, Product, ProductCategory
from serviceshop.repositories.product_repo import ProductRepository
from serviceshop.utils.fields import (
    SQL_INT_MAX,
    FieldInput,
    missing_fields,
    to_datetime,
    to_non_negative_int,
    to_number,
    to_string_list,
)
from serviceshop.utils.log import get_logger
from serviceshop.utils.transactions import write_transaction

log = get_logger("serviceshop.catalog", "CATALOG")

CATEGORIES = [c.value for c in ProductCategory]


class CatalogService:
    """
    Owns Product records: validation, price/offer rules and the
    append-only price history.
    """

    def __init__(self, db: Session, settings: Settings = default_settings):
        self.db = db
        self.settings = settings
        self.repo = ProductRepository(db)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _history_entry(self, price: float, offer: float, at: datetime) -> Dict:
        return {"price": price, "offerPercentage": offer, "changedAt": at.isoformat()}

    # -- field rules -------------------------------------------------------

    def _title(self, value: Any) -> str:
        title = str(value).strip() if value is not None else ""
        if not title:
            raise ValidationError("Product validation failed.", {"title": "Product title is required"})
        return title

    def _category(self, value: Any) -> str:
        if value not in CATEGORIES:
            raise ValidationError(
                "Product validation failed.",
                {"category": f"must be one of: {', '.join(CATEGORIES)}"},
            )
        return value

    def _price(self, value: Any) -> float:
        price = to_number(value, "price")
        if price < 0:
            raise ValidationError("Product validation failed.", {"price": "must be >= 0"})
        return price

    def _offer(self, value: Any) -> float:
        offer = to_number(value, "offerPercentage")
        if 0 <= offer <= MAX_OFFER_PERCENTAGE:
            return offer
        if self.settings.OFFER_PERCENTAGE_POLICY == "clamp":
            clamped = float(min(max(offer, 0), MAX_OFFER_PERCENTAGE))
            log.debug("offerPercentage %s clamped to %s", offer, clamped)
            return clamped
        raise ValidationError(
            "Product validation failed.",
            {"offerPercentage": f"must be between 0 and {MAX_OFFER_PERCENTAGE}"},
        )

    # -- operations --------------------------------------------------------

    def create(self, fields: Dict) -> Product:
        log.debug("create body: %s", fields)
        missing = missing_fields(fields, ("title", "category"))
        if fields.get("price") is None or fields.get("price") == "":
            missing.append("price")
        if missing:
            raise ValidationError(
                "Product title, category and price are required.",
                {n: "required" for n in missing},
            )

        title = self._title(fields["title"])
        category = self._category(fields["category"])
        price = self._price(fields["price"])

        offer_in = FieldInput.read(fields, "offerPercentage")
        offer = self._offer(offer_in.value) if offer_in.has_value else 0.0

        stock_in = FieldInput.read(fields, "stock")
        stock = to_non_negative_int(stock_in.value, "stock") if stock_in.has_value else 0

        expiry_in = FieldInput.read(fields, "offerExpiry")
        offer_expiry = to_datetime(expiry_in.value) if expiry_in.has_value else None

        code = fields.get("code")
        now = self._now()
        product = Product(
            code=(str(code).strip() or None) if code else None,
            title=title,
            category=category,
            description=str(fields.get("description") or "").strip(),
            price=price,
            offer_percentage=offer,
            stock=stock,
            hide_product=bool(fields.get("hideProduct")),
            images=to_string_list(fields.get("images")),
            offer_expiry=offer_expiry,
            price_history=[self._history_entry(price, offer, now)],
            created_at=now,
            updated_at=now,
        )
        with write_transaction(self.db):
            self.repo.add(product)
        log.info("created product id=%s title=%r price=%s", product.id, product.title, product.price)
        return product

    def update(self, product_id: Any, fields: Dict) -> Product:
        try:
            pid = int(product_id)
        except (TypeError, ValueError):
            raise NotFound("Product not found")
        if not 0 < pid <= SQL_INT_MAX:
            raise NotFound("Product not found")

        if not self.settings.SERIALIZE_PRODUCT_UPDATES:
            return self._apply_update(pid, fields)

        locks_dir = os.path.join(tempfile.gettempdir(), "serviceshop_locks")
        os.makedirs(locks_dir, exist_ok=True)
        lock = FileLock(os.path.join(locks_dir, f"product_{pid}.lock"))
        try:
            with lock.acquire(timeout=self.settings.PRODUCT_LOCK_TIMEOUT_SECONDS):
                # drop anything cached so the read below sees the last committed write
                self.db.expire_all()
                return self._apply_update(pid, fields)
        except Timeout:
            raise StoreError("Product is being updated, try again")

    def _apply_update(self, pid: int, fields: Dict) -> Product:
        log.debug("update body for %s: %s", pid, fields)

        with write_transaction(self.db):
            product = self.repo.get(pid)
            if not product:
                raise NotFound("Product not found")

            changes: Dict[str, Any] = {}
            price_changed = False

            title_in = FieldInput.read(fields, "title")
            if not title_in.is_unset:
                changes["title"] = self._title(title_in.value)

            category_in = FieldInput.read(fields, "category")
            if not category_in.is_unset:
                changes["category"] = self._category(category_in.value)

            description_in = FieldInput.read(fields, "description")
            if not description_in.is_unset:
                changes["description"] = str(description_in.value or "").strip()

            code_in = FieldInput.read(fields, "code")
            if not code_in.is_unset:
                changes["code"] = (str(code_in.value).strip() or None) if code_in.has_value else None

            # an empty price means "leave it alone"
            price_in = FieldInput.read(fields, "price")
            if price_in.has_value:
                new_price = self._price(price_in.value)
                if product.price != new_price:
                    changes["price"] = new_price
                    price_changed = True

            offer_in = FieldInput.read(fields, "offerPercentage")
            if not offer_in.is_unset:
                new_offer = self._offer(offer_in.value) if offer_in.has_value else 0.0
                if product.offer_percentage != new_offer:
                    changes["offer_percentage"] = new_offer
                    price_changed = True

            stock_in = FieldInput.read(fields, "stock")
            if not stock_in.is_unset:
                changes["stock"] = (
                    to_non_negative_int(stock_in.value, "stock") if stock_in.has_value else 0
                )

            hide_in = FieldInput.read(fields, "hideProduct")
            if not hide_in.is_unset:
                changes["hide_product"] = bool(hide_in.value)

            images_in = FieldInput.read(fields, "images")
            if not images_in.is_unset:
                changes["images"] = to_string_list(images_in.value)

            expiry_in = FieldInput.read(fields, "offerExpiry")
            if expiry_in.is_clear:
                changes["offer_expiry"] = None
            elif expiry_in.has_value:
                parsed = to_datetime(expiry_in.value)
                # unparseable dates leave the stored expiry untouched
                if parsed is not None:
                    changes["offer_expiry"] = parsed

            for attr, value in changes.items():
                setattr(product, attr, value)

            now = self._now()
            if price_changed:
                # one entry per call, carrying the final price and offer
                product.price_history = list(product.price_history or []) + [
                    self._history_entry(product.price, product.offer_percentage, now)
                ]
            product.updated_at = now
            self.db.flush()

        log.info(
            "updated product id=%s fields=%s price_changed=%s",
            pid,
            sorted(changes),
            price_changed,
        )
        return product

    def list_public(self) -> List[Product]:
        return self.repo.list(include_hidden=False)

    def list_admin(self) -> List[Product]:
        return self.repo.list(include_hidden=True)
