from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from partsdesk.models.spare_part import SparePart
from partsdesk.schemas.base_dto import BaseDTO


class SparePartCreate(BaseModel):
    gsm_number: str = Field(..., min_length=1, description="GSM / part number")
    category: str = Field(..., min_length=1, description="Category label")
    manufacturer: Optional[str] = Field(None, description="Manufacturer")
    price: Decimal = Field(..., ge=0, description="Unit sell price")
    cost_price: Optional[Decimal] = Field(None, ge=0, description="Unit cost price")
    stock_quantity: int = Field(0, ge=0, description="Units on hand")
    minimum_stock: int = Field(0, ge=0, description="Reorder threshold")
    unit: str = Field("pcs", min_length=1, description="Unit label")
    location: Optional[str] = Field(None, description="Storage location")


class SparePartUpdate(BaseModel):
    gsm_number: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    manufacturer: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    cost_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    minimum_stock: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None


class SparePartDTO(BaseDTO):
    id: str
    gsm_number: str
    category: str
    manufacturer: Optional[str] = None
    price: float
    cost_price: Optional[float] = None
    stock_quantity: int
    minimum_stock: int
    unit: str
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain_model(cls, part: SparePart) -> "SparePartDTO":
        return cls(
            id=part.id,
            gsm_number=part.gsm_number,
            category=part.category,
            manufacturer=part.manufacturer,
            price=float(part.price or 0),
            cost_price=float(part.cost_price) if part.cost_price is not None else None,
            stock_quantity=part.stock_quantity,
            minimum_stock=part.minimum_stock,
            unit=part.unit,
            location=part.location,
            created_at=part.created_at,
        )
