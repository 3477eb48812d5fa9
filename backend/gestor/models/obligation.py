import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from gestor.db import Base, utcnow
from gestor.models.enums import ObligationKind, ObligationStatus


def _enum_values(e):
    return [m.value for m in e]


class Obligation(Base):
    """Lançamento financeiro (despesa ou receita) que pode ser pago em parcelas."""

    __tablename__ = "obligations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id: Mapped[str] = mapped_column(String(36), index=True)

    title: Mapped[str] = mapped_column(String(200))

    # valor pendente atual; só muda via pagamento
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    # valor na criação; preenchido no primeiro pagamento parcial se ausente
    original_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)

    kind: Mapped[ObligationKind] = mapped_column(
        Enum(ObligationKind, native_enum=False, length=10, values_callable=_enum_values), index=True
    )
    status: Mapped[ObligationStatus] = mapped_column(
        Enum(ObligationStatus, native_enum=False, length=10, values_callable=_enum_values), index=True
    )

    category: Mapped[str] = mapped_column(String(80))
    description: Mapped[str] = mapped_column(String(500), default="")
    payment_method: Mapped[str | None] = mapped_column(String(40), nullable=True)

    # data da transação ou competência (base para relatórios)
    due_date: Mapped[date] = mapped_column(Date, index=True)

    # referências (não são relação de posse)
    related_fixed_cost_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    related_obligation_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # compare-and-swap: UPDATE ... WHERE version = :lido
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class PaymentRecord(Base):
    """Pagamento gerado por um pagamento parcial. Imutável depois de criado."""

    __tablename__ = "payment_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id: Mapped[str] = mapped_column(String(36), index=True)

    title: Mapped[str] = mapped_column(String(220))
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2))
    kind: Mapped[ObligationKind] = mapped_column(
        Enum(ObligationKind, native_enum=False, length=10, values_callable=_enum_values),
        default=ObligationKind.EXPENSE,
    )
    status: Mapped[ObligationStatus] = mapped_column(
        Enum(ObligationStatus, native_enum=False, length=10, values_callable=_enum_values),
        default=ObligationStatus.PAID,
    )
    payment_date: Mapped[date] = mapped_column(Date, index=True)
    category: Mapped[str] = mapped_column(String(80))
    notes: Mapped[str] = mapped_column(String(500), default="")
    payment_method: Mapped[str | None] = mapped_column(String(40), nullable=True)

    source_obligation_id: Mapped[str] = mapped_column(ForeignKey("obligations.id"), index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
