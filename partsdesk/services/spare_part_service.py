from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from partsdesk.logger import get_logger
from partsdesk.models.spare_part import SparePart
from partsdesk.services.money import to_cents

logger = get_logger(__name__)


class SparePartService:
    """
    CRUD over the spare_parts table.

    Every read returns a fresh snapshot; derived figures are computed
    elsewhere from that snapshot and never stored.
    """

    EDITABLE_FIELDS = {
        "gsm_number",
        "category",
        "manufacturer",
        "price",
        "cost_price",
        "stock_quantity",
        "minimum_stock",
        "unit",
        "location",
    }

    NULLABLE_FIELDS = {"manufacturer", "cost_price", "location"}
    MONEY_FIELDS = {"price", "cost_price"}

    def __init__(self, db: Session):
        self.db = db

    def list_parts(self) -> List[SparePart]:
        return (
            self.db.query(SparePart)
            .order_by(SparePart.created_at.desc())
            .all()
        )

    def get_part(self, part_id: str) -> Optional[SparePart]:
        return self.db.get(SparePart, part_id)

    def create_part(
        self,
        *,
        gsm_number: str,
        category: str,
        price,
        cost_price=None,
        stock_quantity: int = 0,
        minimum_stock: int = 0,
        unit: str = "pcs",
        manufacturer: Optional[str] = None,
        location: Optional[str] = None,
    ) -> SparePart:
        """
        Add a part to the inventory.

        :param gsm_number: Part number shown on bills
        :param category: Category label
        :param price: Unit sell price
        :param cost_price: Unit cost price, optional
        """
        self._check_counts(stock_quantity, minimum_stock)

        part = SparePart(
            id=str(uuid4()),
            gsm_number=gsm_number,
            category=category,
            manufacturer=manufacturer,
            price=to_cents(price),
            cost_price=to_cents(cost_price) if cost_price is not None else None,
            stock_quantity=stock_quantity,
            minimum_stock=minimum_stock,
            unit=unit,
            location=location,
        )
        self.db.add(part)
        self.db.flush()

        logger.info("Spare part created: %s (%s)", part.gsm_number, part.id)
        return part

    def update_part(self, part_id: str, updates: Dict[str, Any]) -> SparePart:
        """
        Modify whitelisted fields of a part. Unchanged values are skipped.

        :param part_id: ID of the part to modify
        :param updates: Dictionary of field updates
        """
        part = self.get_part(part_id)
        if not part:
            raise ValueError("Spare part not found")

        for field, new_value in updates.items():
            if field not in self.EDITABLE_FIELDS:
                raise ValueError(f"Field '{field}' is not editable")
            if new_value is None and field not in self.NULLABLE_FIELDS:
                raise ValueError(f"Field '{field}' cannot be empty")
            if field in self.MONEY_FIELDS and new_value is not None:
                new_value = to_cents(new_value)
            if getattr(part, field) == new_value:
                continue
            setattr(part, field, new_value)

        self._check_counts(part.stock_quantity, part.minimum_stock)
        self.db.flush()

        logger.info("Spare part updated: %s fields=%s", part.id, sorted(updates))
        return part

    def delete_part(self, part_id: str) -> None:
        part = self.get_part(part_id)
        if not part:
            raise ValueError("Spare part not found")

        self.db.delete(part)
        self.db.flush()
        logger.info("Spare part deleted: %s", part_id)

    @staticmethod
    def _check_counts(stock_quantity, minimum_stock) -> None:
        for name, value in (("stock_quantity", stock_quantity), ("minimum_stock", minimum_stock)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer")
