from typing import Dict, List, Optional

from pydantic import BaseModel


class LowStockPartDTO(BaseModel):
    id: str
    gsm_number: str
    category: Optional[str] = None
    stock_quantity: int
    minimum_stock: int
    critical: bool


class InventorySummaryDTO(BaseModel):
    total_parts: int
    inventory_value: float
    total_profit: float
    low_stock_count: int
    low_stock: List[LowStockPartDTO]


class LedgerRowDTO(BaseModel):
    id: str
    gsm: str
    category: Optional[str] = None
    price: float
    cost: float
    profit_per_piece: float
    stock: int
    total_profit: float


class LedgerSummaryDTO(BaseModel):
    total_cost: float
    total_profit: float
    net_revenue: float
    # unweighted by stock, kept apart from total_profit on purpose
    profit_per_piece_sum: float


class ChartPointDTO(BaseModel):
    label: str
    profit: float
    expense: float
    net: float


class ProfitReportDTO(BaseModel):
    rows: List[LedgerRowDTO]
    summary: LedgerSummaryDTO
    chart: List[ChartPointDTO]
    filters: Dict[str, Optional[str]]
    categories: List[str]
    gsm_numbers: List[str]
    empty_message: Optional[str] = None
