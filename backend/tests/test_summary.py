from datetime import date
from decimal import Decimal

from gestor.models.enums import ObligationKind, ObligationStatus
from gestor.services.ledger import PartialPaymentLedger
from gestor.services.summary import current_month_summary
from gestor.db import SessionLocal


def test_current_month_summary(db_session, make_account, make_obligation):
    owner_id, token = make_account()
    today = date(2026, 10, 17)

    make_obligation(owner_id, amount="1000.00", kind=ObligationKind.REVENUE, status=ObligationStatus.PAID, due_date=date(2026, 10, 3))
    make_obligation(owner_id, amount="300.00", status=ObligationStatus.PAID, due_date=date(2026, 10, 4))
    make_obligation(owner_id, amount="400.00", kind=ObligationKind.REVENUE, due_date=date(2026, 10, 20))
    pending_id = make_obligation(owner_id, amount="500.00", due_date=date(2026, 10, 10))
    # fora do mês
    make_obligation(owner_id, amount="999.00", status=ObligationStatus.PAID, due_date=date(2026, 9, 30))

    PartialPaymentLedger(SessionLocal).apply_partial_payment(token, pending_id, "200.00", date(2026, 10, 11))

    s = current_month_summary(db_session, owner_id, today=today)

    assert s.month == "2026-10"
    assert s.revenue == Decimal("1000.00")
    assert s.expenses == Decimal("500.00")  # 300 pago + 200 parcial
    assert s.pending_revenue == Decimal("400.00")
    assert s.pending_expenses == Decimal("300.00")
    assert s.balance == Decimal("500.00")


def test_summary_endpoint_empty(client, auth_header):
    r = client.get("/summary/current-month", headers=auth_header)
    assert r.status_code == 200
    assert Decimal(r.json()["revenue"]) == Decimal("0")
    assert Decimal(r.json()["expenses"]) == Decimal("0")


def test_partial_receipt_on_revenue_counts_as_revenue(db_session, make_account, make_obligation):
    owner_id, token = make_account()
    today = date(2026, 10, 17)

    receivable_id = make_obligation(owner_id, amount="1000.00", kind=ObligationKind.REVENUE, due_date=date(2026, 10, 5))
    PartialPaymentLedger(SessionLocal).apply_partial_payment(token, receivable_id, "400.00", date(2026, 10, 6))

    s = current_month_summary(db_session, owner_id, today=today)

    assert s.revenue == Decimal("400.00")
    assert s.expenses == Decimal("0.00")
    assert s.pending_revenue == Decimal("600.00")
    assert s.balance == Decimal("400.00")
