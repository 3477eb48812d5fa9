from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from gestor.core.errors import AuthorizationError, InvalidStateError, NotFoundError, TransactionError, ValidationError
from gestor.db import utcnow
from gestor.models.enums import ObligationKind, ObligationStatus
from gestor.models.obligation import Obligation, PaymentRecord
from gestor.schemas.obligation import ObligationCreate, ObligationUpdate
from gestor.services.ledger import to_money

logger = logging.getLogger(__name__)


def _non_negative(value) -> Decimal:
    amount = to_money(value)
    if amount < 0:
        raise ValidationError("valor deve ser >= 0", error_code="NEGATIVE_AMOUNT")
    return amount


def get_obligation(db: Session, owner_id: str, obligation_id: str) -> Obligation:
    ob = db.get(Obligation, obligation_id)
    if ob is None:
        raise NotFoundError("lançamento não encontrado", error_code="OBLIGATION_NOT_FOUND")
    if ob.owner_id != owner_id:
        raise AuthorizationError()
    return ob


def create_obligation(db: Session, owner_id: str, data: ObligationCreate) -> Obligation:
    # lançamento nasce pendente ou já pago; "liquidado" só via pagamentos parciais
    if data.status == ObligationStatus.SETTLED:
        raise ValidationError("status inicial deve ser 'pending' ou 'paid'", error_code="INVALID_INITIAL_STATUS")

    now = utcnow()
    ob = Obligation(
        owner_id=owner_id,
        title=data.title.strip(),
        amount=_non_negative(data.amount),
        kind=data.kind,
        status=data.status,
        category=data.category.strip(),
        description=data.description or "",
        payment_method=data.payment_method,
        due_date=data.due_date or now.date(),
        related_fixed_cost_id=data.related_fixed_cost_id,
        related_obligation_id=data.related_obligation_id,
        created_at=now,
        updated_at=now,
    )
    db.add(ob)
    db.commit()
    db.refresh(ob)
    logger.info("obligation created id=%s owner_id=%s kind=%s", ob.id, owner_id, ob.kind.value)
    return ob


def list_obligations(
    db: Session,
    owner_id: str,
    *,
    start: date | None = None,
    end: date | None = None,
    status: ObligationStatus | None = None,
    kind: ObligationKind | None = None,
    order: str = "desc",
) -> list[Obligation]:
    if start is not None and end is not None and start > end:
        raise ValidationError("start não pode ser maior que end", error_code="INVALID_PERIOD")

    q = select(Obligation).where(Obligation.owner_id == owner_id)
    if start is not None:
        q = q.where(Obligation.due_date >= start)
    if end is not None:
        q = q.where(Obligation.due_date <= end)
    if status is not None:
        q = q.where(Obligation.status == status)
    if kind is not None:
        q = q.where(Obligation.kind == kind)

    if order == "asc":
        q = q.order_by(Obligation.due_date.asc(), Obligation.created_at.asc())
    else:
        q = q.order_by(Obligation.due_date.desc(), Obligation.created_at.desc())
    return list(db.scalars(q))


def _commit_versioned(db: Session, obligation_id: str) -> None:
    # UPDATE/DELETE condicionados a `version`: perdeu para um pagamento concorrente
    try:
        db.commit()
    except StaleDataError as exc:
        db.rollback()
        logger.warning("obligation changed concurrently id=%s", obligation_id)
        raise TransactionError() from exc


def _payment_count(db: Session, obligation_id: str) -> int:
    return int(
        db.scalar(select(func.count(PaymentRecord.id)).where(PaymentRecord.source_obligation_id == obligation_id)) or 0
    )


def update_obligation(db: Session, owner_id: str, obligation_id: str, patch: ObligationUpdate) -> Obligation:
    ob = get_obligation(db, owner_id, obligation_id)
    if ob.status != ObligationStatus.PENDING:
        raise InvalidStateError("só é possível editar lançamentos pendentes", error_code="OBLIGATION_NOT_PENDING")

    changes = patch.model_dump(exclude_unset=True)
    if changes.get("amount") is not None:
        if ob.original_amount is not None or _payment_count(db, ob.id):
            raise InvalidStateError(
                "valor de lançamento com pagamentos parciais não pode ser editado",
                error_code="OBLIGATION_HAS_PAYMENTS",
            )
        changes["amount"] = _non_negative(changes["amount"])
    if "status" in changes and changes["status"] == ObligationStatus.SETTLED:
        raise ValidationError("status 'settled' só é atingido via pagamentos parciais", error_code="INVALID_STATUS")

    for field, value in changes.items():
        if value is None and field in ("title", "amount", "kind", "status", "category", "due_date", "description"):
            continue
        setattr(ob, field, value)
    ob.updated_at = utcnow()

    _commit_versioned(db, ob.id)
    db.refresh(ob)
    return ob


def delete_obligation(db: Session, owner_id: str, obligation_id: str) -> None:
    ob = get_obligation(db, owner_id, obligation_id)
    if _payment_count(db, ob.id):
        raise InvalidStateError(
            "lançamento com pagamentos registrados não pode ser excluído",
            error_code="OBLIGATION_HAS_PAYMENTS",
        )
    db.delete(ob)
    _commit_versioned(db, obligation_id)
    logger.info("obligation deleted id=%s owner_id=%s", obligation_id, owner_id)


def list_payments(db: Session, owner_id: str, obligation_id: str) -> list[PaymentRecord]:
    ob = get_obligation(db, owner_id, obligation_id)
    q = (
        select(PaymentRecord)
        .where(PaymentRecord.source_obligation_id == ob.id)
        .order_by(PaymentRecord.payment_date.asc(), PaymentRecord.created_at.asc())
    )
    return list(db.scalars(q))
