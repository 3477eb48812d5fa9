from datetime import date
from decimal import Decimal


def _create(client, headers, **overrides):
    payload = {
        "title": "Conta de energia",
        "amount": "1200.00",
        "kind": "expense",
        "category": "Energia",
        "due_date": date.today().isoformat(),
    }
    payload.update(overrides)
    r = client.post("/obligations", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_get_obligation(client, auth_header):
    ob = _create(client, auth_header)
    assert ob["status"] == "pending"
    assert Decimal(ob["amount"]) == Decimal("1200.00")
    assert ob["original_amount"] is None

    r = client.get(f"/obligations/{ob['id']}", headers=auth_header)
    assert r.status_code == 200
    assert r.json()["title"] == "Conta de energia"


def test_create_rejects_settled_status(client, auth_header):
    r = client.post(
        "/obligations",
        json={"title": "x", "amount": "10", "kind": "expense", "category": "x", "status": "settled"},
        headers=auth_header,
    )
    assert r.status_code == 422


def test_create_rejects_negative_amount(client, auth_header):
    r = client.post(
        "/obligations",
        json={"title": "x", "amount": "-1", "kind": "expense", "category": "x"},
        headers=auth_header,
    )
    assert r.status_code == 422


def test_list_is_owner_scoped_and_filtered(client, auth_header, other_auth_header):
    mine = _create(client, auth_header, due_date="2026-03-10")
    _create(client, auth_header, due_date="2026-04-10", kind="revenue", title="Venda balcão", category="Vendas")
    _create(client, other_auth_header, due_date="2026-03-10")

    r = client.get("/obligations", headers=auth_header)
    assert r.status_code == 200
    assert len(r.json()) == 2
    # ordenado por data desc
    assert r.json()[0]["due_date"] == "2026-04-10"

    r = client.get("/obligations?start=2026-03-01&end=2026-03-31", headers=auth_header)
    assert [o["id"] for o in r.json()] == [mine["id"]]

    r = client.get("/obligations?kind=revenue", headers=auth_header)
    assert [o["kind"] for o in r.json()] == ["revenue"]

    r = client.get("/obligations?start=2026-04-01&end=2026-03-01", headers=auth_header)
    assert r.status_code == 422
    assert r.json()["detail"]["error_code"] == "INVALID_PERIOD"


def test_other_owner_cannot_read(client, auth_header, other_auth_header):
    ob = _create(client, auth_header)
    r = client.get(f"/obligations/{ob['id']}", headers=other_auth_header)
    assert r.status_code == 403
    assert r.json()["detail"] == {"error_code": "PERMISSION_DENIED", "message": "permissão negada"}


def test_get_not_found(client, auth_header):
    r = client.get("/obligations/999999", headers=auth_header)
    assert r.status_code == 404


def test_partial_payment_flow(client, auth_header):
    ob = _create(client, auth_header, amount="1200.00")

    r = client.post(
        f"/obligations/{ob['id']}/partial-payments",
        json={"amount": "200.00", "payment_date": "2026-10-01", "payment_method": "dinheiro"},
        headers=auth_header,
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert Decimal(body["remaining_amount"]) == Decimal("1000.00")
    assert body["status"] == "pending"

    r = client.post(
        f"/obligations/{ob['id']}/partial-payments",
        json={"amount": "1000.00", "payment_date": "2026-10-02"},
        headers=auth_header,
    )
    assert r.status_code == 201
    assert Decimal(r.json()["remaining_amount"]) == Decimal("0")
    assert r.json()["status"] == "settled"

    r = client.get(f"/obligations/{ob['id']}", headers=auth_header)
    assert r.json()["status"] == "settled"
    assert Decimal(r.json()["original_amount"]) == Decimal("1200.00")

    r = client.get(f"/obligations/{ob['id']}/payments", headers=auth_header)
    pays = r.json()
    assert [Decimal(p["amount"]) for p in pays] == [Decimal("200.00"), Decimal("1000.00")]
    assert all(p["source_obligation_id"] == ob["id"] for p in pays)
    assert pays[0]["title"] == "Pagamento: Conta de energia"

    # liquidado: não aceita mais pagamento
    r = client.post(
        f"/obligations/{ob['id']}/partial-payments",
        json={"amount": "1.00", "payment_date": "2026-10-03"},
        headers=auth_header,
    )
    assert r.status_code == 409
    assert r.json()["detail"]["error_code"] == "OBLIGATION_NOT_PENDING"


def test_partial_payment_errors(client, auth_header, other_auth_header):
    ob = _create(client, auth_header, amount="500.00")
    url = f"/obligations/{ob['id']}/partial-payments"

    r = client.post(url, json={"amount": "501.00", "payment_date": "2026-10-01"}, headers=auth_header)
    assert r.status_code == 422
    assert r.json()["detail"]["error_code"] == "PAYMENT_EXCEEDS_BALANCE"

    r = client.post(url, json={"amount": "0", "payment_date": "2026-10-01"}, headers=auth_header)
    assert r.status_code == 422
    assert r.json()["detail"]["error_code"] == "PAYMENT_NOT_POSITIVE"

    r = client.post(url, json={"amount": "10.00", "payment_date": "2026-10-01"}, headers=other_auth_header)
    assert r.status_code == 403

    r = client.post(url, json={"amount": "10.00", "payment_date": "2026-10-01"})
    assert r.status_code == 401

    r = client.post("/obligations/nao-existe/partial-payments", json={"amount": "10.00", "payment_date": "2026-10-01"}, headers=auth_header)
    assert r.status_code == 404

    r = client.get(f"/obligations/{ob['id']}", headers=auth_header)
    assert Decimal(r.json()["amount"]) == Decimal("500.00")


def test_update_and_delete(client, auth_header):
    ob = _create(client, auth_header, amount="100.00")

    r = client.patch(f"/obligations/{ob['id']}", json={"title": "Energia outubro", "amount": "120.00"}, headers=auth_header)
    assert r.status_code == 200
    assert r.json()["title"] == "Energia outubro"
    assert Decimal(r.json()["amount"]) == Decimal("120.00")

    r = client.delete(f"/obligations/{ob['id']}", headers=auth_header)
    assert r.status_code == 204
    assert client.get(f"/obligations/{ob['id']}", headers=auth_header).status_code == 404


def test_amount_locked_after_partial_payment(client, auth_header):
    ob = _create(client, auth_header, amount="100.00")
    client.post(
        f"/obligations/{ob['id']}/partial-payments",
        json={"amount": "40.00", "payment_date": "2026-10-01"},
        headers=auth_header,
    )

    r = client.patch(f"/obligations/{ob['id']}", json={"amount": "500.00"}, headers=auth_header)
    assert r.status_code == 409
    assert r.json()["detail"]["error_code"] == "OBLIGATION_HAS_PAYMENTS"

    # outros campos continuam editáveis
    r = client.patch(f"/obligations/{ob['id']}", json={"description": "parcelado"}, headers=auth_header)
    assert r.status_code == 200

    r = client.delete(f"/obligations/{ob['id']}", headers=auth_header)
    assert r.status_code == 409


def test_patch_null_description_keeps_current_value(client, auth_header):
    ob = _create(client, auth_header, description="conta da loja")

    r = client.patch(f"/obligations/{ob['id']}", json={"description": None}, headers=auth_header)
    assert r.status_code == 200, r.text
    assert r.json()["description"] == "conta da loja"
