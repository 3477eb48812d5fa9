from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class PricingMethod(str, Enum):
    UNITARIO = "unitario"
    META_PERIODICA = "meta_periodica"


class MarginType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PricingInput(BaseModel):
    product_name: str = Field(min_length=1, max_length=200)
    method: PricingMethod = PricingMethod.UNITARIO
    direct_cost: Decimal = Field(default=Decimal("0"), ge=0)
    # unitario: rateio de indiretos por unidade
    indirect_cost: Decimal = Field(default=Decimal("0"), ge=0)
    # meta_periodica: custos fixos do período e vendas estimadas
    period_fixed_costs: Decimal = Field(default=Decimal("0"), ge=0)
    estimated_sales: int = Field(default=1, ge=1)
    production_hours: Decimal | None = Field(default=None, ge=0)
    margin_type: MarginType = MarginType.PERCENTAGE
    margin_value: Decimal = Field(default=Decimal("0"), ge=0)


class PricingResult(BaseModel):
    product_name: str
    method: PricingMethod
    base_cost: Decimal
    margin_amount: Decimal
    suggested_price: Decimal
    profit_per_hour: Decimal | None = None
