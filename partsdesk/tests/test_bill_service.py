from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from partsdesk.models.bill import Bill
from partsdesk.models.bill_item import BillItem
from partsdesk.services.bill_service import (
    BillService,
    DuplicateBillNumberError,
    bill_total,
    line_total,
)


def rows_of(service, bill_id):
    return [(i.gsm_number, i.quantity, i.price, i.total) for i in service.get_items(bill_id)]


def test_line_total_rounds_to_paise():
    assert line_total(3, Decimal("33.335")) == Decimal("100.01")
    assert line_total(2, 100) == Decimal("200.00")


def test_create_bill_computes_totals(db, sample_bill):
    service = BillService(db)

    assert sample_bill.total_amount == Decimal("250")
    assert [i.total for i in service.get_items(sample_bill.id)] == [Decimal("200"), Decimal("50")]
    assert sample_bill.status == "Paid"


def test_duplicate_bill_number(db, sample_bill):
    with pytest.raises(DuplicateBillNumberError):
        BillService(db).create_bill(
            bill_number="B-001",
            customer_name="Someone",
            items=[{"gsm_number": "X", "quantity": 1, "price": 1}],
        )


def test_save_bill_upserts_and_prunes(db, sample_bill):
    service = BillService(db)
    first, second = service.get_items(sample_bill.id)

    service.save_bill(
        sample_bill.id,
        customer_name="Ravi Motors Pvt",
        payment_mode="UPI",
        status="Unpaid",
        items=[
            {"id": second.id, "gsm_number": "GSM-20", "quantity": 4, "price": Decimal("50")},
            {"gsm_number": "GSM-30", "quantity": 1, "price": Decimal("75.50")},
        ],
    )
    db.commit()

    items = service.get_items(sample_bill.id)
    assert [i.gsm_number for i in items] == ["GSM-20", "GSM-30"]
    assert items[0].id == second.id
    assert db.get(BillItem, first.id) is None

    bill = service.get_bill(sample_bill.id)
    assert bill.total_amount == Decimal("275.50")
    assert (bill.customer_name, bill.payment_mode, bill.status) == ("Ravi Motors Pvt", "UPI", "Unpaid")


def test_save_twice_is_idempotent(db, sample_bill):
    service = BillService(db)
    edited = [
        {"id": i.id, "gsm_number": i.gsm_number, "quantity": i.quantity + 1, "price": i.price}
        for i in service.get_items(sample_bill.id)
    ]

    for _ in range(2):
        service.save_bill(sample_bill.id, customer_name="Ravi Motors", payment_mode="Cash", status="Paid", items=edited)
        db.commit()
        snapshot = (service.get_bill(sample_bill.id).total_amount, sorted(rows_of(service, sample_bill.id)))

    assert snapshot[0] == Decimal("400")
    service.save_bill(sample_bill.id, customer_name="Ravi Motors", payment_mode="Cash", status="Paid", items=edited)
    db.commit()
    assert (service.get_bill(sample_bill.id).total_amount, sorted(rows_of(service, sample_bill.id))) == snapshot


def test_failed_save_leaves_stored_bill_untouched(db, sample_bill):
    service = BillService(db)
    before = rows_of(service, sample_bill.id)

    with pytest.raises(ValueError):
        service.save_bill(
            sample_bill.id,
            customer_name="Ravi Motors",
            payment_mode=None,
            status="Paid",
            items=[
                {"gsm_number": "GSM-40", "quantity": 1, "price": 10},
                {"gsm_number": "GSM-50", "quantity": 0, "price": 10},
            ],
        )
    db.rollback()

    assert rows_of(service, sample_bill.id) == before
    assert service.get_bill(sample_bill.id).total_amount == Decimal("250")


def test_delete_bill_removes_items(db, sample_bill):
    service = BillService(db)

    service.delete_bill(sample_bill.id)
    db.commit()

    assert db.get(Bill, sample_bill.id) is None
    assert db.query(BillItem).filter(BillItem.bill_id == sample_bill.id).count() == 0


def test_bill_total_sums_line_totals():
    items = [BillItem(total=Decimal("200")), BillItem(total=Decimal("50"))]
    assert bill_total(items) == Decimal("250")


def test_prices_are_rounded_to_paise_before_line_totals(db):
    service = BillService(db)
    bill = service.create_bill(
        bill_number="B-002",
        customer_name="Kiran Auto",
        items=[{"gsm_number": "GSM-10", "quantity": 2, "price": "10.005"}],
    )
    db.commit()

    item = service.get_items(bill.id)[0]
    assert item.price == Decimal("10.01")
    assert item.total == item.quantity * item.price
    assert bill.total_amount == Decimal("20.02")

    # re-saving the stored rows unchanged keeps every total
    rows = [
        {"id": i.id, "gsm_number": i.gsm_number, "quantity": i.quantity, "price": i.price}
        for i in service.get_items(bill.id)
    ]
    service.save_bill(bill.id, customer_name="Kiran Auto", payment_mode=None, status="Paid", items=rows)
    db.commit()

    assert service.get_bill(bill.id).total_amount == Decimal("20.02")
    assert rows_of(service, bill.id) == [("GSM-10", 2, Decimal("10.01"), Decimal("20.02"))]


def test_bill_item_constraints_hold_in_storage(db, sample_bill):
    db.add(BillItem(
        id="bad-row",
        bill_id=sample_bill.id,
        line_no=9,
        gsm_number="GSM-99",
        quantity=0,
        price=Decimal("5"),
        total=Decimal("0"),
    ))
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()

    db.add(BillItem(
        id="bad-price",
        bill_id=sample_bill.id,
        line_no=9,
        gsm_number="GSM-99",
        quantity=1,
        price=Decimal("-1"),
        total=Decimal("-1"),
    ))
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()
