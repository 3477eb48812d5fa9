"""
Ledger de pagamentos parciais.

Aplica um pagamento parcial sobre um lançamento pendente, numa única
transação do banco:

- cria um PaymentRecord (despesa, paga) com o valor pago;
- reduz o valor pendente do lançamento e, se zerar, marca como liquidado.

Concorrência: o lançamento é relido dentro da transação (FOR UPDATE quando o
dialeto suporta) e o UPDATE é condicionado à coluna `version`. Se outro
pagamento gravou antes, o flush levanta StaleDataError, a transação inteira é
desfeita e repetida contra o estado novo (até LEDGER_TX_MAX_ATTEMPTS).
"""
from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from gestor.core.errors import (
    AuthorizationError,
    InvalidStateError,
    NotFoundError,
    TransactionError,
    ValidationError,
)
from gestor.core.security import resolve_owner_id
from gestor.core.settings import settings
from gestor.db import utcnow
from gestor.models.enums import ObligationKind, ObligationStatus
from gestor.models.obligation import Obligation, PaymentRecord

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# saldo <= 0.009 conta como quitado (arredondamento de centavos)
SETTLE_EPSILON = Decimal("0.009")

IdentityResolver = Callable[[Session, "str | None"], str]


@dataclass(frozen=True)
class PartialPaymentResult:
    payment_record_id: str
    remaining_amount: Decimal
    status: ObligationStatus


def to_money(value) -> Decimal:
    """Converte para Decimal com 2 casas. Levanta ValidationError se não for número finito."""
    if isinstance(value, bool):
        raise ValidationError("valor inválido", error_code="INVALID_AMOUNT")
    try:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValidationError("valor deve ser um número finito", error_code="INVALID_AMOUNT")
            d = Decimal(str(value))
        else:
            d = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("valor inválido", error_code="INVALID_AMOUNT")

    if not d.is_finite():
        raise ValidationError("valor deve ser um número finito", error_code="INVALID_AMOUNT")
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def _validate_payment_amount(value) -> Decimal:
    amount = to_money(value)
    if amount <= 0:
        raise ValidationError("o valor do pagamento deve ser maior que zero", error_code="PAYMENT_NOT_POSITIVE")
    return amount


def _validate_payment_date(value) -> date:
    # datetime é subclasse de date: normaliza para a data
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError("data de pagamento inválida", error_code="INVALID_PAYMENT_DATE")


class PartialPaymentLedger:
    def __init__(
        self,
        session_factory: sessionmaker,
        identity_resolver: IdentityResolver = resolve_owner_id,
        max_attempts: int | None = None,
    ):
        self.session_factory = session_factory
        self.identity_resolver = identity_resolver
        if max_attempts is None:
            max_attempts = settings.LEDGER_TX_MAX_ATTEMPTS
        if max_attempts < 1:
            raise ValueError("max_attempts deve ser >= 1")
        self.max_attempts = int(max_attempts)

    def apply_partial_payment(
        self,
        caller_identity: str | None,
        obligation_id: str,
        payment_amount,
        payment_date,
        payment_method: str | None = None,
        notes: str | None = None,
    ) -> PartialPaymentResult:
        with self.session_factory() as db:
            owner_id = self.identity_resolver(db, caller_identity)

        amount = _validate_payment_amount(payment_amount)
        paid_on = _validate_payment_date(payment_date)

        last_exc: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = self._apply_once(owner_id, obligation_id, amount, paid_on, payment_method, notes)
            except (StaleDataError, OperationalError) as exc:
                # conflito de concorrência / lock: nada foi gravado, tenta de novo com estado relido
                last_exc = exc
                logger.warning(
                    "partial payment conflict obligation_id=%s attempt=%s/%s: %s",
                    obligation_id, attempt, self.max_attempts, exc.__class__.__name__,
                )
                continue
            except SQLAlchemyError as exc:
                logger.exception("DB error applying partial payment obligation_id=%s", obligation_id)
                raise TransactionError() from exc

            logger.info(
                "partial payment applied obligation_id=%s payment_id=%s remaining=%s status=%s",
                obligation_id, result.payment_record_id, result.remaining_amount, result.status.value,
            )
            return result

        raise TransactionError() from last_exc

    def _load_obligation(self, db: Session, obligation_id: str) -> Obligation | None:
        return db.scalar(select(Obligation).where(Obligation.id == obligation_id).with_for_update())

    def _apply_once(
        self,
        owner_id: str,
        obligation_id: str,
        amount: Decimal,
        paid_on: date,
        payment_method: str | None,
        notes: str | None,
    ) -> PartialPaymentResult:
        with self.session_factory() as db, db.begin():
            # sempre relê dentro da transação (nunca confia em leitura anterior)
            ob = self._load_obligation(db, obligation_id)
            if ob is None:
                raise NotFoundError("lançamento não encontrado", error_code="OBLIGATION_NOT_FOUND")
            if ob.owner_id != owner_id:
                raise AuthorizationError()
            if ob.status != ObligationStatus.PENDING:
                raise InvalidStateError("só é possível pagar lançamentos pendentes", error_code="OBLIGATION_NOT_PENDING")
            if amount > ob.amount:
                raise ValidationError(
                    "o valor do pagamento não pode ser maior que o valor pendente",
                    error_code="PAYMENT_EXCEEDS_BALANCE",
                )

            remaining = ob.amount - amount
            if remaining <= SETTLE_EPSILON:
                remaining = Decimal("0.00")
                new_status = ObligationStatus.SETTLED
            else:
                new_status = ObligationStatus.PENDING

            now = utcnow()
            payment = PaymentRecord(
                id=str(uuid.uuid4()),
                owner_id=ob.owner_id,
                title=f"Pagamento: {ob.title}",
                amount=amount,
                kind=ObligationKind.EXPENSE,
                status=ObligationStatus.PAID,
                payment_date=paid_on,
                category=ob.category,
                notes=notes or f"Pagamento referente a: {ob.title}",
                payment_method=payment_method or None,
                source_obligation_id=ob.id,
                created_at=now,
                updated_at=now,
            )
            db.add(payment)

            if ob.original_amount is None:
                ob.original_amount = ob.amount
            ob.amount = remaining
            ob.status = new_status
            ob.updated_at = now

            payment_id = payment.id

        return PartialPaymentResult(payment_record_id=payment_id, remaining_amount=remaining, status=new_status)
