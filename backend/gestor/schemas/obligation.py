from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from gestor.models.enums import ObligationKind, ObligationStatus


class ObligationCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    amount: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    kind: ObligationKind
    status: ObligationStatus = ObligationStatus.PENDING
    category: str = Field(min_length=1, max_length=80)
    description: str = Field(default="", max_length=500)
    payment_method: str | None = Field(default=None, max_length=40)
    due_date: date | None = Field(default=None, description="Data da transação ou competência")
    related_fixed_cost_id: str | None = None
    related_obligation_id: str | None = None


class ObligationUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    amount: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    kind: ObligationKind | None = None
    status: ObligationStatus | None = None
    category: str | None = Field(default=None, min_length=1, max_length=80)
    description: str | None = Field(default=None, max_length=500)
    payment_method: str | None = Field(default=None, max_length=40)
    due_date: date | None = None


class ObligationOut(BaseModel):
    id: str
    title: str
    amount: Decimal
    original_amount: Decimal | None = None
    kind: ObligationKind
    status: ObligationStatus
    category: str
    description: str
    payment_method: str | None = None
    due_date: date
    related_fixed_cost_id: str | None = None
    related_obligation_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PartialPaymentIn(BaseModel):
    amount: Decimal = Field(description="Valor pago nesta parcela (> 0)")
    payment_date: date
    payment_method: str | None = Field(default=None, max_length=40)
    notes: str | None = Field(default=None, max_length=500)


class PartialPaymentOut(BaseModel):
    payment_record_id: str
    remaining_amount: Decimal
    status: ObligationStatus


class PaymentRecordOut(BaseModel):
    id: str
    title: str
    amount: Decimal
    kind: ObligationKind
    status: ObligationStatus
    payment_date: date
    category: str
    notes: str
    payment_method: str | None = None
    source_obligation_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
