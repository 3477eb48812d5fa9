from decimal import Decimal

import pytest
from pydantic import ValidationError

from gestor.schemas.pricing import MarginType, PricingInput, PricingMethod
from gestor.services.pricing import calculate_suggested_price


def test_unitario_percentage_margin():
    res = calculate_suggested_price(
        PricingInput(product_name="Bolo de pote", direct_cost=Decimal("8.00"), indirect_cost=Decimal("2.00"), margin_value=Decimal("50"))
    )
    assert res.base_cost == Decimal("10.00")
    assert res.margin_amount == Decimal("5.00")
    assert res.suggested_price == Decimal("15.00")
    assert res.profit_per_hour is None


def test_meta_periodica_fixed_margin():
    res = calculate_suggested_price(
        PricingInput(
            product_name="Camiseta estampada",
            method=PricingMethod.META_PERIODICA,
            direct_cost=Decimal("20.00"),
            period_fixed_costs=Decimal("3000.00"),
            estimated_sales=200,
            margin_type=MarginType.FIXED,
            margin_value=Decimal("12.50"),
            production_hours=Decimal("50"),
        )
    )
    # 20 + 3000/200
    assert res.base_cost == Decimal("35.00")
    assert res.margin_amount == Decimal("12.50")
    assert res.suggested_price == Decimal("47.50")
    # 12.50 / 50
    assert res.profit_per_hour == Decimal("0.25")


def test_rounding_to_cents():
    res = calculate_suggested_price(
        PricingInput(
            product_name="Sabonete",
            method=PricingMethod.META_PERIODICA,
            direct_cost=Decimal("1.00"),
            period_fixed_costs=Decimal("100.00"),
            estimated_sales=3,
            margin_value=Decimal("10"),
        )
    )
    assert res.base_cost == Decimal("34.33")
    assert res.suggested_price == Decimal("37.77")


def test_estimated_sales_must_be_positive():
    with pytest.raises(ValidationError):
        PricingInput(product_name="x", method=PricingMethod.META_PERIODICA, estimated_sales=0)


def test_pricing_endpoint(client, auth_header):
    r = client.post(
        "/pricing/suggest",
        json={"product_name": "Bolo", "direct_cost": "8", "indirect_cost": "2", "margin_value": "50"},
        headers=auth_header,
    )
    assert r.status_code == 200
    assert Decimal(r.json()["suggested_price"]) == Decimal("15.00")

    assert client.post("/pricing/suggest", json={"product_name": "Bolo"}).status_code == 401


def test_profit_per_hour_uses_unit_margin():
    res = calculate_suggested_price(
        PricingInput(
            product_name="Vela aromática",
            method=PricingMethod.META_PERIODICA,
            direct_cost=Decimal("10.00"),
            period_fixed_costs=Decimal("100.00"),
            estimated_sales=10,
            margin_type=MarginType.FIXED,
            margin_value=Decimal("5.00"),
            production_hours=Decimal("5"),
        )
    )
    assert res.suggested_price == Decimal("25.00")
    # (25 - 20) / 5, independente das vendas estimadas
    assert res.profit_per_hour == Decimal("1.00")
