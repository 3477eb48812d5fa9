from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from gestor.db import utcnow
from gestor.models.enums import ObligationKind, ObligationStatus
from gestor.models.obligation import Obligation, PaymentRecord
from gestor.schemas.summary import MonthSummary
from gestor.services.fixed_costs import month_bounds
from gestor.services.ledger import to_money


def _sum_obligations(db: Session, owner_id: str, start: date, end: date, kind: ObligationKind, status: ObligationStatus) -> Decimal:
    q = select(func.coalesce(func.sum(Obligation.amount), 0)).where(
        Obligation.owner_id == owner_id,
        Obligation.due_date >= start,
        Obligation.due_date <= end,
        Obligation.kind == kind,
        Obligation.status == status,
    )
    return to_money(db.scalar(q) or 0)


def _sum_partial_payments(db: Session, owner_id: str, start: date, end: date, kind: ObligationKind) -> Decimal:
    # o tipo vem do lançamento de origem, não do PaymentRecord
    q = (
        select(func.coalesce(func.sum(PaymentRecord.amount), 0))
        .join(Obligation, PaymentRecord.source_obligation_id == Obligation.id)
        .where(
            PaymentRecord.owner_id == owner_id,
            PaymentRecord.payment_date >= start,
            PaymentRecord.payment_date <= end,
            Obligation.kind == kind,
        )
    )
    return to_money(db.scalar(q) or 0)


def current_month_summary(db: Session, owner_id: str, today: date | None = None) -> MonthSummary:
    """
    Resumo do mês corrente.
    Despesas = lançamentos de despesa pagos + pagamentos parciais de despesas do mês;
    recebimentos parciais de receitas entram em receitas
    (o lançamento liquidado fica com amount=0, então não conta em dobro).
    """
    ref = today or utcnow().date()
    start, end = month_bounds(ref)

    paid_revenue = _sum_obligations(db, owner_id, start, end, ObligationKind.REVENUE, ObligationStatus.PAID)
    paid_expenses = _sum_obligations(db, owner_id, start, end, ObligationKind.EXPENSE, ObligationStatus.PAID)

    partial_expenses = _sum_partial_payments(db, owner_id, start, end, ObligationKind.EXPENSE)
    partial_receipts = _sum_partial_payments(db, owner_id, start, end, ObligationKind.REVENUE)

    pending_revenue = _sum_obligations(db, owner_id, start, end, ObligationKind.REVENUE, ObligationStatus.PENDING)
    pending_expenses = _sum_obligations(db, owner_id, start, end, ObligationKind.EXPENSE, ObligationStatus.PENDING)

    revenue = paid_revenue + partial_receipts
    expenses = paid_expenses + partial_expenses
    return MonthSummary(
        month=start.strftime("%Y-%m"),
        revenue=revenue,
        expenses=expenses,
        pending_revenue=pending_revenue,
        pending_expenses=pending_expenses,
        balance=revenue - expenses,
    )
