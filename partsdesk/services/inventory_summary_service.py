"""
Dashboard figures derived from one SparePart snapshot.

Each figure is a single pass over the same list, so all of them always
describe the same snapshot.
"""
from decimal import Decimal
from typing import Iterable, List

from partsdesk.schemas.report_dto import InventorySummaryDTO, LowStockPartDTO


def unit_cost(part) -> Decimal:
    # missing cost price counts as 0
    return Decimal(str(part.cost_price or 0))


def unit_price(part) -> Decimal:
    return Decimal(str(part.price or 0))


def is_low_stock(part) -> bool:
    return part.stock_quantity < part.minimum_stock


def is_critical_stock(part) -> bool:
    # stock <= minimum / 2, kept in integers
    return part.stock_quantity * 2 <= part.minimum_stock


def inventory_value(parts: Iterable) -> Decimal:
    return sum((unit_cost(p) * p.stock_quantity for p in parts), Decimal("0"))


def total_profit(parts: Iterable) -> Decimal:
    return sum(
        ((unit_price(p) - unit_cost(p)) * p.stock_quantity for p in parts),
        Decimal("0"),
    )


def low_stock_parts(parts: Iterable) -> List:
    return [p for p in parts if is_low_stock(p)]


def summarize_inventory(parts: Iterable) -> InventorySummaryDTO:
    parts = list(parts)
    low = low_stock_parts(parts)

    return InventorySummaryDTO(
        total_parts=len(parts),
        inventory_value=float(inventory_value(parts)),
        total_profit=float(total_profit(parts)),
        low_stock_count=len(low),
        low_stock=[
            LowStockPartDTO(
                id=p.id,
                gsm_number=p.gsm_number,
                category=p.category,
                stock_quantity=p.stock_quantity,
                minimum_stock=p.minimum_stock,
                critical=is_critical_stock(p),
            )
            for p in low
        ],
    )
