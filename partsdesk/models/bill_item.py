# partsdesk/models/bill_item.py
from sqlalchemy import (
    String,
    Numeric,
    Integer,
    ForeignKey,
    CheckConstraint,
)
from partsdesk.db.base import Base
from sqlalchemy.orm import Mapped, mapped_column
from decimal import Decimal


class BillItem(Base):
    """
    One line of a Bill.
    gsm_number references a SparePart by part number only (no foreign key).
    """

    __tablename__ = "bill_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_bill_items_quantity_positive"),
        CheckConstraint("price >= 0", name="ck_bill_items_price_non_negative"),
    )

    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Bill item UUID")

    bill_id :Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning bill",
    )

    gsm_number :Mapped[str] = mapped_column(String(100), nullable=False, default="", comment="Part number")
    line_no :Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Position of the row on the bill")

    # =========
    # 🔢 Quantity & pricing
    # =========
    quantity :Mapped[int] = mapped_column(Integer, nullable=False, comment="Units sold, at least 1")
    price :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, comment="Unit price")
    total :Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, comment="quantity * price")

    def __repr__(self) -> str:
        return (
            f"<BillItem id={self.id} gsm={self.gsm_number} "
            f"qty={self.quantity} total={self.total}>"
        )
