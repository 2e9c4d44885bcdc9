# partsdesk/services/profit_ledger_service.py
from decimal import Decimal
from typing import Iterable, List, Optional

import pandas as pd

from partsdesk.schemas.report_dto import (
    ChartPointDTO,
    LedgerRowDTO,
    LedgerSummaryDTO,
    ProfitReportDTO,
)
from partsdesk.services.inventory_summary_service import unit_cost, unit_price

EMPTY_LEDGER_MESSAGE = "No matching records."
CHART_LABEL = "Inventory"

LEDGER_COLUMNS = {
    "gsm": "GSM",
    "category": "Category",
    "cost": "Cost",
    "price": "Sell Price",
    "profit_per_piece": "Profit / Piece",
    "stock": "Stock",
    "total_profit": "Total Profit",
}


def filter_parts(parts: Iterable, category: Optional[str] = None, gsm: Optional[str] = None) -> List:
    """
    Equality filters joined with AND; a blank filter matches everything.
    """
    result = []
    for p in parts:
        if category and p.category != category:
            continue
        if gsm and p.gsm_number != gsm:
            continue
        result.append(p)
    return result


def build_ledger(parts: Iterable) -> List[LedgerRowDTO]:
    rows = []
    for p in parts:
        cost = unit_cost(p)
        sell = unit_price(p)
        profit_per_piece = sell - cost
        rows.append(
            LedgerRowDTO(
                id=p.id,
                gsm=p.gsm_number,
                category=p.category,
                price=float(sell),
                cost=float(cost),
                profit_per_piece=float(profit_per_piece),
                stock=p.stock_quantity,
                total_profit=float(profit_per_piece * p.stock_quantity),
            )
        )
    return rows


def summarize_ledger(rows: Iterable[LedgerRowDTO]) -> LedgerSummaryDTO:
    total_cost = Decimal("0")
    total_profit = Decimal("0")
    net_revenue = Decimal("0")
    profit_per_piece_sum = Decimal("0")

    # accumulate in Decimal, rows carry floats for presentation
    for r in rows:
        total_cost += Decimal(str(r.cost)) * r.stock
        total_profit += Decimal(str(r.total_profit))
        net_revenue += Decimal(str(r.price)) * r.stock
        profit_per_piece_sum += Decimal(str(r.profit_per_piece))

    return LedgerSummaryDTO(
        total_cost=float(total_cost),
        total_profit=float(total_profit),
        net_revenue=float(net_revenue),
        profit_per_piece_sum=float(profit_per_piece_sum),
    )


def chart_dataset(summary: LedgerSummaryDTO) -> List[ChartPointDTO]:
    # one bucket for the current snapshot, not a time series
    return [
        ChartPointDTO(
            label=CHART_LABEL,
            profit=summary.total_profit,
            expense=summary.total_cost,
            net=summary.net_revenue,
        )
    ]


def ledger_report(parts: Iterable, category: Optional[str] = None, gsm: Optional[str] = None) -> ProfitReportDTO:
    """
    Filter -> ledger rows -> summary -> chart for one SparePart snapshot.
    Filter choices are taken from the unfiltered snapshot.

    :param parts: SparePart snapshot
    :param category: category equality filter, blank for all
    :param gsm: part number equality filter, blank for all
    """
    parts = list(parts)
    rows = build_ledger(filter_parts(parts, category, gsm))
    summary = summarize_ledger(rows)

    categories = sorted({p.category for p in parts if p.category})
    gsm_numbers = sorted({p.gsm_number for p in parts if p.gsm_number})

    return ProfitReportDTO(
        rows=rows,
        summary=summary,
        chart=chart_dataset(summary),
        filters={"category": category or None, "gsm": gsm or None},
        categories=categories,
        gsm_numbers=gsm_numbers,
        empty_message=EMPTY_LEDGER_MESSAGE if not rows else None,
    )


def ledger_dataframe(rows: List[LedgerRowDTO]) -> pd.DataFrame:
    """Ledger rows as a DataFrame with display headers, for export."""
    records = [r.model_dump(include=set(LEDGER_COLUMNS)) for r in rows]
    df = pd.DataFrame(records, columns=list(LEDGER_COLUMNS))
    return df.rename(columns=LEDGER_COLUMNS)
