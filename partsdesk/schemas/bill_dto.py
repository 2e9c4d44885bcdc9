from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from partsdesk.db.enums import BillStatus, PaymentMode
from partsdesk.models.bill import Bill
from partsdesk.models.bill_item import BillItem
from partsdesk.schemas.base_dto import BaseDTO


class BillItemIn(BaseModel):
    id: Optional[str] = Field(None, description="Existing item id, absent for new rows")
    gsm_number: str = Field("", description="Part number")
    quantity: int = Field(..., ge=1, description="Units sold")
    price: Decimal = Field(..., ge=0, description="Unit price")
    # line totals sent by the client are ignored and recomputed
    total: Optional[Decimal] = Field(None, description="Ignored")


class _BillHeaderIn(BaseModel):
    customer_name: str = Field(..., min_length=1)
    payment_mode: Optional[PaymentMode] = None
    status: BillStatus = BillStatus.Paid

    @field_validator("payment_mode", mode="before")
    @classmethod
    def blank_payment_mode(cls, value):
        # the edit form posts "" for "Select"
        if value == "":
            return None
        return value


class BillCreate(_BillHeaderIn):
    bill_number: str = Field(..., min_length=1)
    items: List[BillItemIn] = Field(..., min_length=1)


class BillUpdate(_BillHeaderIn):
    items: List[BillItemIn] = Field(default_factory=list)


class BillItemDTO(BaseDTO):
    id: str
    gsm_number: str
    quantity: int
    price: float
    total: float

    @classmethod
    def from_domain_model(cls, item: BillItem) -> "BillItemDTO":
        return cls(
            id=item.id,
            gsm_number=item.gsm_number,
            quantity=item.quantity,
            price=float(item.price),
            total=float(item.total),
        )


class BillDTO(BaseDTO):
    id: str
    bill_number: str
    customer_name: str
    total_amount: float
    payment_mode: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    items: Optional[List[BillItemDTO]] = None

    @classmethod
    def from_domain_model(cls, bill: Bill, items: Optional[List[BillItem]] = None) -> "BillDTO":
        return cls(
            id=bill.id,
            bill_number=bill.bill_number,
            customer_name=bill.customer_name,
            total_amount=float(bill.total_amount or 0),
            payment_mode=bill.payment_mode,
            status=bill.status,
            created_at=bill.created_at,
            items=[BillItemDTO.from_domain_model(i) for i in items] if items is not None else None,
        )
