from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from gestor.core.errors import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from gestor.db import utcnow
from gestor.models.enums import ObligationKind, ObligationStatus
from gestor.models.fixed_cost import FixedCost
from gestor.models.obligation import Obligation
from gestor.schemas.fixed_cost import FixedCostCreate, FixedCostUpdate
from gestor.services.ledger import to_money

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Custos Fixos"


def month_bounds(today: date) -> tuple[date, date]:
    start = today.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


def get_fixed_cost(db: Session, owner_id: str, fixed_cost_id: str) -> FixedCost:
    fc = db.get(FixedCost, fixed_cost_id)
    if fc is None:
        raise NotFoundError("custo fixo não encontrado", error_code="FIXED_COST_NOT_FOUND")
    if fc.owner_id != owner_id:
        raise AuthorizationError()
    return fc


def create_fixed_cost(db: Session, owner_id: str, data: FixedCostCreate) -> FixedCost:
    amount = to_money(data.monthly_amount)
    if amount < 0:
        raise ValidationError("o valor mensal deve ser não-negativo", error_code="NEGATIVE_AMOUNT")

    now = utcnow()
    fc = FixedCost(
        owner_id=owner_id,
        name=data.name.strip(),
        monthly_amount=amount,
        category=data.category or None,
        notes=data.notes or None,
        active=data.active,
        created_at=now,
        updated_at=now,
    )
    db.add(fc)
    db.commit()
    db.refresh(fc)
    return fc


def list_fixed_costs(db: Session, owner_id: str, *, active_only: bool = False) -> list[FixedCost]:
    q = select(FixedCost).where(FixedCost.owner_id == owner_id)
    if active_only:
        q = q.where(FixedCost.active.is_(True))
    return list(db.scalars(q.order_by(FixedCost.name.asc())))


def update_fixed_cost(db: Session, owner_id: str, fixed_cost_id: str, patch: FixedCostUpdate) -> FixedCost:
    fc = get_fixed_cost(db, owner_id, fixed_cost_id)
    changes = patch.model_dump(exclude_unset=True)
    if changes.get("monthly_amount") is not None:
        changes["monthly_amount"] = to_money(changes["monthly_amount"])

    for field, value in changes.items():
        if value is None and field in ("name", "monthly_amount", "active"):
            continue
        setattr(fc, field, value)
    fc.updated_at = utcnow()

    db.commit()
    db.refresh(fc)
    return fc


def delete_fixed_cost(db: Session, owner_id: str, fixed_cost_id: str) -> None:
    # lançamentos já gerados ficam; related_fixed_cost_id é só referência
    fc = get_fixed_cost(db, owner_id, fixed_cost_id)
    db.delete(fc)
    db.commit()


def launch_fixed_cost(db: Session, owner_id: str, fixed_cost_id: str, today: date | None = None) -> Obligation:
    """
    Gera uma despesa pendente a partir do custo fixo.
    Não checa duplicidade no mês: o caller consulta `launched_fixed_cost_ids_for_month`.
    """
    fc = get_fixed_cost(db, owner_id, fixed_cost_id)
    if not fc.active:
        raise InvalidStateError("custo fixo inativo não pode ser lançado", error_code="FIXED_COST_INACTIVE")

    now = utcnow()
    ob = Obligation(
        owner_id=owner_id,
        title=fc.name,
        amount=fc.monthly_amount,
        kind=ObligationKind.EXPENSE,
        status=ObligationStatus.PENDING,
        category=fc.category or DEFAULT_CATEGORY,
        description=f"Despesa recorrente de {fc.name}",
        due_date=today or now.date(),
        related_fixed_cost_id=fc.id,
        created_at=now,
        updated_at=now,
    )
    db.add(ob)
    db.commit()
    db.refresh(ob)
    logger.info("fixed cost launched fixed_cost_id=%s obligation_id=%s", fc.id, ob.id)
    return ob


def launched_fixed_cost_ids_for_month(db: Session, owner_id: str, today: date | None = None) -> list[str]:
    start, end = month_bounds(today or utcnow().date())
    q = (
        select(Obligation.related_fixed_cost_id)
        .where(
            Obligation.owner_id == owner_id,
            Obligation.due_date >= start,
            Obligation.due_date <= end,
            Obligation.related_fixed_cost_id.is_not(None),
        )
        .distinct()
    )
    return sorted(fid for fid in db.scalars(q) if fid)
