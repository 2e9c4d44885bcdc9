from decimal import Decimal

from partsdesk.models.spare_part import SparePart
from partsdesk.services.profit_ledger_service import (
    EMPTY_LEDGER_MESSAGE,
    build_ledger,
    filter_parts,
    ledger_dataframe,
    ledger_report,
    summarize_ledger,
)


def part(part_id, category, gsm, price, cost, stock):
    return SparePart(
        id=part_id,
        gsm_number=gsm,
        category=category,
        price=Decimal(str(price)),
        cost_price=Decimal(str(cost)) if cost is not None else None,
        stock_quantity=stock,
        minimum_stock=0,
        unit="pcs",
    )


PARTS = [
    part("1", "Brake", "GSM-1", price=15, cost=10, stock=5),
    part("2", "Brake", "GSM-2", price=100, cost=None, stock=2),
    part("3", "Clutch", "GSM-3", price=40, cost=30, stock=0),
]


def test_blank_filters_match_everything():
    assert len(filter_parts(PARTS)) == 3
    assert len(filter_parts(PARTS, category="", gsm="")) == 3


def test_filters_use_and_semantics():
    assert [p.id for p in filter_parts(PARTS, category="Brake")] == ["1", "2"]
    assert [p.id for p in filter_parts(PARTS, category="Brake", gsm="GSM-2")] == ["2"]
    assert filter_parts(PARTS, category="Clutch", gsm="GSM-2") == []


def test_ledger_rows():
    rows = build_ledger(PARTS)

    assert rows[0].profit_per_piece == 5
    assert rows[0].total_profit == 25
    assert rows[1].cost == 0
    assert rows[1].total_profit == 200
    assert rows[2].total_profit == 0


def test_summary_keeps_unweighted_profit_per_piece():
    summary = summarize_ledger(build_ledger(PARTS))

    assert summary.total_cost == 50
    assert summary.total_profit == 225
    assert summary.net_revenue == 275
    # 5 + 100 + 10, not weighted by stock
    assert summary.profit_per_piece_sum == 115


def test_report_with_no_matches_has_empty_state():
    report = ledger_report(PARTS, category="Suspension")

    assert report.rows == []
    assert report.empty_message == EMPTY_LEDGER_MESSAGE
    assert report.summary.total_profit == 0
    assert report.categories == ["Brake", "Clutch"]


def test_chart_is_single_bucket():
    report = ledger_report(PARTS, category="Brake")

    assert len(report.chart) == 1
    point = report.chart[0]
    assert point.label == "Inventory"
    assert (point.profit, point.expense, point.net) == (225, 50, 275)
    assert report.empty_message is None


def test_dataframe_headers():
    df = ledger_dataframe(build_ledger(PARTS[:1]))

    assert list(df.columns) == ["GSM", "Category", "Cost", "Sell Price", "Profit / Piece", "Stock", "Total Profit"]
    assert df.iloc[0]["Total Profit"] == 25
