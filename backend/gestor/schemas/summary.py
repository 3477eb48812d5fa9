from decimal import Decimal

from pydantic import BaseModel, Field


class MonthSummary(BaseModel):
    month: str = Field(description="YYYY-MM")
    revenue: Decimal = Field(description="Receitas pagas no mês")
    expenses: Decimal = Field(description="Despesas pagas no mês (inclui pagamentos parciais)")
    pending_revenue: Decimal
    pending_expenses: Decimal
    balance: Decimal
