from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from partsdesk.logger import get_logger
from partsdesk.models.bill import Bill
from partsdesk.models.bill_item import BillItem
from partsdesk.services.money import line_total, to_cents

logger = get_logger(__name__)


class DuplicateBillNumberError(ValueError):
    pass


def bill_total(items: Iterable) -> Decimal:
    return sum((Decimal(str(i.total)) for i in items), Decimal("0"))


class BillService:
    """
    Bills and their items.

    The service only flushes; the caller owns the transaction and commits or
    rolls back once, so a bill header and its item set are always written
    together.
    """

    def __init__(self, db: Session):
        self.db = db

    # ======================================================
    # 🔎 Reads
    # ======================================================

    def list_bills(self) -> List[Bill]:
        return (
            self.db.query(Bill)
            .order_by(Bill.created_at.desc())
            .all()
        )

    def get_bill(self, bill_id: str) -> Optional[Bill]:
        return self.db.get(Bill, bill_id)

    def get_items(self, bill_id: str) -> List[BillItem]:
        return (
            self.db.query(BillItem)
            .filter(BillItem.bill_id == bill_id)
            .order_by(BillItem.line_no)
            .all()
        )

    # ======================================================
    # ✏️ Writes
    # ======================================================

    def create_bill(
        self,
        *,
        bill_number: str,
        customer_name: str,
        items: List[Dict[str, Any]],
        payment_mode: Optional[str] = None,
        status: str = "Paid",
    ) -> Bill:
        """
        Create a bill together with its items.

        :param bill_number: Human readable number, unique
        :param customer_name: Customer name
        :param items: dicts with gsm_number / quantity / price
        :param payment_mode: Cash / UPI / Bank / Card or None
        :param status: Paid / Unpaid / Pending
        """
        exists = (
            self.db.query(Bill)
            .filter(Bill.bill_number == bill_number)
            .first()
        )
        if exists:
            raise DuplicateBillNumberError("Bill number already exists")

        bill = Bill(
            id=str(uuid4()),
            bill_number=bill_number,
            customer_name=customer_name,
            payment_mode=payment_mode,
            status=status,
            total_amount=Decimal("0"),
        )
        self.db.add(bill)
        self.db.flush()

        new_items = [
            self._new_item(bill.id, line_no, row)
            for line_no, row in enumerate(items)
        ]
        self.db.add_all(new_items)
        bill.total_amount = bill_total(new_items)
        self.db.flush()

        logger.info(
            "Bill created: %s items=%d total=%s",
            bill.bill_number, len(new_items), bill.total_amount,
        )
        return bill

    def save_bill(
        self,
        bill_id: str,
        *,
        customer_name: str,
        payment_mode: Optional[str],
        status: str,
        items: List[Dict[str, Any]],
    ) -> Bill:
        """
        Write an edited bill: header with the recomputed total, then
        upsert-and-prune of the item set.

        Items whose id belongs to this bill are updated in place, rows without
        a known id are inserted, stored items missing from `items` are deleted.
        Totals are recomputed from quantity and price.
        """
        bill = self.get_bill(bill_id)
        if not bill:
            raise ValueError("Bill not found")

        existing = {item.id: item for item in self.get_items(bill_id)}
        kept = []

        for line_no, row in enumerate(items):
            item = existing.pop(row.get("id"), None) if row.get("id") else None
            if item is None:
                item = self._new_item(bill_id, line_no, row)
                self.db.add(item)
            else:
                item.line_no = line_no
                item.gsm_number = str(row.get("gsm_number") or "")
                item.quantity = self._check_quantity(row["quantity"])
                item.price = self._check_price(row["price"])
                item.total = line_total(item.quantity, item.price)
            kept.append(item)

        # prune
        for stale in existing.values():
            self.db.delete(stale)

        bill.customer_name = customer_name
        bill.payment_mode = payment_mode
        bill.status = status
        bill.total_amount = bill_total(kept)
        self.db.flush()

        logger.info(
            "Bill saved: %s items=%d removed=%d total=%s",
            bill.bill_number, len(kept), len(existing), bill.total_amount,
        )
        return bill

    def delete_bill(self, bill_id: str) -> None:
        bill = self.get_bill(bill_id)
        if not bill:
            raise ValueError("Bill not found")

        (
            self.db.query(BillItem)
            .filter(BillItem.bill_id == bill_id)
            .delete(synchronize_session=False)
        )
        self.db.delete(bill)
        self.db.flush()
        logger.info("Bill deleted: %s", bill.bill_number)

    # ======================================================
    # 🔐 Internal helpers
    # ======================================================

    def _new_item(self, bill_id: str, line_no: int, row: Dict[str, Any]) -> BillItem:
        quantity = self._check_quantity(row["quantity"])
        price = self._check_price(row["price"])
        return BillItem(
            id=str(uuid4()),
            bill_id=bill_id,
            line_no=line_no,
            gsm_number=str(row.get("gsm_number") or ""),
            quantity=quantity,
            price=price,
            total=line_total(quantity, price),
        )

    @staticmethod
    def _check_quantity(quantity) -> int:
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError("Quantity must be a whole number of at least 1")
        return quantity

    @staticmethod
    def _check_price(price) -> Decimal:
        price = to_cents(price)
        if price < 0:
            raise ValueError("Price cannot be negative")
        return price
