from datetime import date

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from gestor.core.security import get_credential, get_current_owner_id
from gestor.db import SessionLocal, get_db
from gestor.models.enums import ObligationKind, ObligationStatus
from gestor.schemas.obligation import (
    ObligationCreate,
    ObligationOut,
    ObligationUpdate,
    PartialPaymentIn,
    PartialPaymentOut,
    PaymentRecordOut,
)
from gestor.services import obligations as svc
from gestor.services.ledger import PartialPaymentLedger

router = APIRouter(prefix="/obligations", tags=["obligations"])

_ledger = PartialPaymentLedger(SessionLocal)


def get_ledger() -> PartialPaymentLedger:
    return _ledger


@router.post("", response_model=ObligationOut, status_code=201)
def create_obligation(payload: ObligationCreate, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return svc.create_obligation(db, owner_id, payload)


@router.get("", response_model=list[ObligationOut])
def list_obligations(
    start: date | None = Query(None, description="YYYY-MM-DD"),
    end: date | None = Query(None, description="YYYY-MM-DD"),
    status: ObligationStatus | None = None,
    kind: ObligationKind | None = None,
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner_id),
):
    return svc.list_obligations(db, owner_id, start=start, end=end, status=status, kind=kind, order=order)


@router.get("/{obligation_id}", response_model=ObligationOut)
def get_obligation(obligation_id: str, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return svc.get_obligation(db, owner_id, obligation_id)


@router.patch("/{obligation_id}", response_model=ObligationOut)
def update_obligation(
    obligation_id: str,
    payload: ObligationUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner_id),
):
    return svc.update_obligation(db, owner_id, obligation_id, payload)


@router.delete("/{obligation_id}", status_code=204)
def delete_obligation(obligation_id: str, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    svc.delete_obligation(db, owner_id, obligation_id)
    return Response(status_code=204)


@router.get("/{obligation_id}/payments", response_model=list[PaymentRecordOut])
def list_payments(obligation_id: str, db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner_id)):
    return svc.list_payments(db, owner_id, obligation_id)


@router.post("/{obligation_id}/partial-payments", response_model=PartialPaymentOut, status_code=201)
def register_partial_payment(
    obligation_id: str,
    payload: PartialPaymentIn,
    credential: str | None = Depends(get_credential),
    ledger: PartialPaymentLedger = Depends(get_ledger),
):
    """
    Registra um pagamento parcial. NÃO é idempotente: repetir após sucesso
    cria um segundo pagamento. Em timeout, releia o lançamento antes de repetir.
    """
    result = ledger.apply_partial_payment(
        credential,
        obligation_id,
        payload.amount,
        payload.payment_date,
        payment_method=payload.payment_method,
        notes=payload.notes,
    )
    return PartialPaymentOut(
        payment_record_id=result.payment_record_id,
        remaining_amount=result.remaining_amount,
        status=result.status,
    )
