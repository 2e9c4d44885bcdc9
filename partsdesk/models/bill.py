# partsdesk/models/bill.py
from sqlalchemy import (
    String,
    Numeric,
    DateTime,
    func,
)
from partsdesk.db.base import Base
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from decimal import Decimal
from typing import Optional


class Bill(Base):
    """
    Customer bill header.
    total_amount is a denormalized copy of the sum of its BillItem totals,
    rewritten by the service on every save.
    """

    __tablename__ = "bills"

    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Bill UUID")

    bill_number :Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="Human readable bill number",
    )

    customer_name :Mapped[str] = mapped_column(String(255), nullable=False, comment="Customer name")

    total_amount :Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
        comment="Sum of item totals at last save",
    )

    payment_mode :Mapped[Optional[str]] = mapped_column(String(20), nullable=True, comment="Cash / UPI / Bank / Card")

    status :Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="Paid",
        comment="Paid / Unpaid / Pending",
    )

    created_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Creation timestamp",
    )

    def __repr__(self) -> str:
        return (
            f"<Bill id={self.id} number={self.bill_number} "
            f"total={self.total_amount}>"
        )
