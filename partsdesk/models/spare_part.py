# partsdesk/models/spare_part.py
from sqlalchemy import (
    String,
    Numeric,
    Integer,
    DateTime,
    CheckConstraint,
    func,
)
from partsdesk.db.base import Base
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from decimal import Decimal
from typing import Optional


class SparePart(Base):
    """
    A spare part held in the shop inventory.

    Invariants:
    - stock_quantity and minimum_stock are non-negative integers
    - price and cost_price are non-negative; missing cost_price counts as 0
    """

    __tablename__ = "spare_parts"
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_spare_parts_stock_non_negative"),
        CheckConstraint("minimum_stock >= 0", name="ck_spare_parts_minimum_non_negative"),
    )

    # =========
    # 🔒 Identity
    # =========
    id :Mapped[str] = mapped_column(String(36), primary_key=True, comment="Spare part UUID")

    gsm_number :Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="GSM / part number printed on the part, used by bill items",
    )

    # =========
    # 🏷 Description
    # =========
    category :Mapped[str] = mapped_column(String(100), nullable=False, comment="Category label")
    manufacturer :Mapped[Optional[str]] = mapped_column(String(255), nullable=True, comment="Manufacturer")
    unit :Mapped[str] = mapped_column(String(50), nullable=False, default="pcs", comment="Unit label")
    location :Mapped[Optional[str]] = mapped_column(String(255), nullable=True, comment="Storage location")

    # =========
    # 💰 Pricing
    # =========
    price :Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, comment="Unit sell price")
    cost_price :Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Unit cost price, absent is treated as 0",
    )

    # =========
    # 📦 Stock
    # =========
    stock_quantity :Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Units on hand")
    minimum_stock :Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Reorder threshold")

    created_at :Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Creation timestamp",
    )

    def __repr__(self) -> str:
        return (
            f"<SparePart id={self.id} gsm={self.gsm_number} "
            f"stock={self.stock_quantity}>"
        )
