"""Calculadora de preço sugerido (custo base + margem), em Decimal."""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from gestor.schemas.pricing import MarginType, PricingInput, PricingMethod, PricingResult


def _to_brl(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def calculate_suggested_price(data: PricingInput) -> PricingResult:
    if data.method == PricingMethod.META_PERIODICA:
        # custo fixo do período diluído nas vendas estimadas
        fixed_share = data.period_fixed_costs / Decimal(data.estimated_sales)
        base_cost = data.direct_cost + fixed_share
    else:
        base_cost = data.direct_cost + data.indirect_cost

    if data.margin_type == MarginType.PERCENTAGE:
        margin = base_cost * data.margin_value / Decimal("100")
    else:
        margin = data.margin_value

    price = base_cost + margin

    profit_per_hour = None
    if data.production_hours is not None and data.production_hours > 0:
        # lucro bruto de uma unidade por hora de produção dela
        profit_per_hour = _to_brl(margin / data.production_hours)

    return PricingResult(
        product_name=data.product_name,
        method=data.method,
        base_cost=_to_brl(base_cost),
        margin_amount=_to_brl(margin),
        suggested_price=_to_brl(price),
        profit_per_hour=profit_per_hour,
    )
