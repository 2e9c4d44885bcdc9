# partsdesk/services/bill_editor.py
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from partsdesk.db.enums import EditState
from partsdesk.logger import get_logger
from partsdesk.services.bill_service import BillService
from partsdesk.services.money import line_total, to_cents

logger = get_logger(__name__)


@dataclass
class EditableItem:
    gsm_number: str = ""
    quantity: int = 1
    price: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    id: Optional[str] = None


class BillEditor:
    """
    In-memory editing session for one bill.

    loading -> ready -> saving -> saved
                  ^         |
                  +- error <+

    - Row edits recompute that row's total immediately.
    - Rows are added and removed by position.
    - total_amount is the stored header total; it only changes on save().
      pending_total is the live sum of the rows.
    - A failed save keeps every in-memory edit and leaves the editor editable.
    """

    def __init__(self, bill_service: BillService, bill_id: str):
        self.bill_service = bill_service
        self.db = bill_service.db
        self.bill_id = bill_id

        self.state = EditState.loading
        self.error_message: Optional[str] = None

        self.bill_number: Optional[str] = None
        self.customer_name = ""
        self.payment_mode: Optional[str] = None
        self.status = "Paid"
        self.total_amount = Decimal("0")
        self.items: List[EditableItem] = []

    # ======================================================
    # 🔁 Lifecycle
    # ======================================================

    def load(self) -> "BillEditor":
        bill = self.bill_service.get_bill(self.bill_id)
        if not bill:
            raise ValueError("Bill not found")

        self.bill_number = bill.bill_number
        self.customer_name = bill.customer_name
        self.payment_mode = bill.payment_mode
        self.status = bill.status or "Paid"
        self.total_amount = Decimal(str(bill.total_amount or 0))
        self.items = [
            EditableItem(
                id=i.id,
                gsm_number=i.gsm_number,
                quantity=i.quantity,
                price=Decimal(str(i.price)),
                total=Decimal(str(i.total)),
            )
            for i in self.bill_service.get_items(self.bill_id)
        ]

        self.state = EditState.ready
        return self

    def save(self) -> bool:
        """
        Persist header and rows in one transaction.
        Returns True on success; on failure the error is kept in
        error_message and the edits stay in memory.
        """
        self._assert_editable()
        self.state = EditState.saving

        try:
            bill = self.bill_service.save_bill(
                self.bill_id,
                customer_name=self.customer_name,
                payment_mode=self.payment_mode,
                status=self.status,
                items=[asdict(item) for item in self.items],
            )
            self.db.commit()
        except (SQLAlchemyError, ValueError) as e:
            self.db.rollback()
            logger.exception("Failed to update bill %s", self.bill_id)
            self.state = EditState.error
            self.error_message = str(e) or "Failed to update bill"
            # error is transient, edits stay open with the message surfaced
            self.state = EditState.ready
            return False

        self.total_amount = Decimal(str(bill.total_amount))
        # stored ids for newly inserted rows
        for item, stored in zip(self.items, self.bill_service.get_items(self.bill_id)):
            item.id = stored.id
        self.error_message = None
        self.state = EditState.saved
        return True

    # ======================================================
    # ✏️ Header edits
    # ======================================================

    def set_header(
        self,
        *,
        customer_name: Optional[str] = None,
        payment_mode: Optional[str] = None,
        status: Optional[str] = None,
    ) -> None:
        self._assert_editable()
        if customer_name is not None:
            self.customer_name = customer_name
        # empty string clears the payment mode
        if payment_mode is not None:
            self.payment_mode = payment_mode or None
        if status is not None:
            self.status = status

    # ======================================================
    # ✏️ Row edits
    # ======================================================

    def set_gsm(self, index: int, gsm_number: str) -> None:
        self._item(index).gsm_number = str(gsm_number or "")

    def set_quantity(self, index: int, quantity: int) -> None:
        item = self._item(index)
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError("Quantity must be a whole number of at least 1")
        item.quantity = quantity
        item.total = line_total(item.quantity, item.price)

    def set_price(self, index: int, price) -> None:
        item = self._item(index)
        price = to_cents(price)
        if price < 0:
            raise ValueError("Price cannot be negative")
        item.price = price
        item.total = line_total(item.quantity, item.price)

    def add_item(self) -> EditableItem:
        self._assert_editable()
        item = EditableItem()
        self.items.append(item)
        return item

    def remove_item(self, index: int) -> EditableItem:
        self._item(index)
        return self.items.pop(index)

    def apply_rows(self, rows: Iterable[Dict[str, Any]]) -> None:
        """
        Replace the rows with submitted ones, going through the same
        per-row setters so every total is recomputed here.
        Ids that do not belong to this bill are dropped.
        """
        self._assert_editable()
        known_ids = {item.id for item in self.items if item.id}
        self.items = []

        for row in rows:
            item = self.add_item()
            index = len(self.items) - 1
            if row.get("id") in known_ids:
                item.id = row["id"]
            self.set_gsm(index, row.get("gsm_number", ""))
            self.set_quantity(index, row["quantity"])
            self.set_price(index, row["price"])

    @property
    def pending_total(self) -> Decimal:
        return sum((item.total for item in self.items), Decimal("0"))

    # ======================================================
    # 🔐 Internal helpers
    # ======================================================

    def _assert_editable(self) -> None:
        if self.state != EditState.ready:
            raise RuntimeError(f"Bill editor is not editable in state '{self.state.value}'")

    def _item(self, index: int) -> EditableItem:
        self._assert_editable()
        if index < 0 or index >= len(self.items):
            raise ValueError(f"No bill item at position {index}")
        return self.items[index]
