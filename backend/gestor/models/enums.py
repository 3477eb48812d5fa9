from __future__ import annotations

from enum import Enum


class ObligationKind(str, Enum):
    EXPENSE = "expense"  # despesa
    REVENUE = "revenue"  # receita


class ObligationStatus(str, Enum):
    PENDING = "pending"  # aguardando pagamento (total ou parcial)
    SETTLED = "settled"  # liquidado via pagamentos parciais
    PAID = "paid"        # pago de uma vez (fora do ledger)
