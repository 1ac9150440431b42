# tests/test_pagos.py
import pytest
import stripe
from fastapi.testclient import TestClient

from autos_lujo.main import app
from autos_lujo.models.venta import Venta
from autos_lujo.routers import pagos

STRIPE_KEY = "sk_test_dummy"


def _stripe_session(auto, usuario, session_id="cs_test_paid", payment_status="paid"):
    # the SDK hands back StripeObjects, not dicts
    return stripe.checkout.Session.construct_from(
        {
            "id": session_id,
            "object": "checkout.session",
            "status": "complete",
            "payment_status": payment_status,
            "amount_total": 950000000,
            "currency": "mxn",
            "customer_details": {"email": "ana@autoslujo.mx"},
            "metadata": {"auto_id": str(auto["id"]), "usuario_id": str(usuario["id"])},
            "url": None,
        },
        STRIPE_KEY,
    )


def _serve_session(monkeypatch, session):
    monkeypatch.setattr(
        stripe.checkout.Session,
        "retrieve",
        lambda session_id, **kwargs: session,
    )


@pytest.fixture()
def stripe_calls(monkeypatch):
    calls = []

    def fake_create(**kwargs):
        calls.append(kwargs)
        return stripe.checkout.Session.construct_from(
            {
                "id": "cs_test_123",
                "object": "checkout.session",
                "url": "https://checkout.stripe.com/c/pay/cs_test_123",
                "metadata": kwargs["metadata"],
            },
            STRIPE_KEY,
        )

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    return calls


@pytest.mark.parametrize("path", ["/api/create-checkout-session", "/api/pago"])
def test_checkout_session_uses_listing_price(client, auto, usuario, stripe_calls, path):
    resp = client.post(path, json={"autoId": auto["id"], "usuarioId": usuario["id"]})
    assert resp.status_code == 200
    assert resp.json() == {
        "id": "cs_test_123",
        "url": "https://checkout.stripe.com/c/pay/cs_test_123",
    }
    assert len(stripe_calls) == 1
    assert stripe_calls[0]["line_items"][0]["price_data"]["unit_amount"] == 950000000


def test_checkout_session_for_unknown_listing(client, usuario, stripe_calls):
    resp = client.post("/api/pago", json={"autoId": 9999, "usuarioId": usuario["id"]})
    assert resp.status_code == 404
    assert stripe_calls == []


def test_checkout_session_provider_failure(client, auto, usuario, monkeypatch):
    def failing_create(**kwargs):
        raise stripe.APIConnectionError("card_declined")

    monkeypatch.setattr(stripe.checkout.Session, "create", failing_create)
    resp = client.post("/api/pago", json={"autoId": auto["id"], "usuarioId": usuario["id"]})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Error al crear la sesión de Stripe"
    assert "card_declined" in body["detalles"]


def test_stripe_session_payload(client, auto, usuario, stripe_calls):
    client.post("/api/pago", json={"autoId": auto["id"], "usuarioId": 3, "precio": 1234.56})

    captured = stripe_calls[0]
    line = captured["line_items"][0]["price_data"]
    assert line["unit_amount"] == 123456
    assert line["currency"] == "mxn"
    assert line["product_data"]["name"] == "Ferrari SF90 Stradale"
    assert captured["mode"] == "payment"
    assert captured["api_key"] == STRIPE_KEY
    assert captured["metadata"] == {"auto_id": str(auto["id"]), "usuario_id": "3"}
    assert captured["success_url"] == "http://localhost:3000/autos/exito?session_id={CHECKOUT_SESSION_ID}"
    assert captured["cancel_url"] == f"http://localhost:3000/autos/{auto['id']}"


def test_checkout_session_lookup(client, auto, usuario, monkeypatch):
    assert client.get("/api/checkout-session").status_code == 400

    _serve_session(monkeypatch, _stripe_session(auto, usuario))
    resp = client.get("/api/checkout-session", params={"session_id": "cs_test_paid"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["payment_status"] == "paid"
    assert body["customer_email"] == "ana@autoslujo.mx"
    assert body["metadata"] == {"auto_id": str(auto["id"]), "usuario_id": str(usuario["id"])}


def test_unexpected_error_is_rendered_as_json(client, monkeypatch):
    def broken_retrieve(session_id, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(stripe.checkout.Session, "retrieve", broken_retrieve)

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/api/checkout-session", params={"session_id": "cs_x"})

    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "Error en servidor"}


def test_sale_requires_paid_session(client, auto, usuario, monkeypatch):
    _serve_session(monkeypatch, _stripe_session(auto, usuario, "cs_test_unpaid", payment_status="unpaid"))
    resp = client.post("/api/ventas", json={"sessionId": "cs_test_unpaid"})
    assert resp.status_code == 400
    assert resp.json()["detalles"] == {"payment_status": "unpaid"}
    assert client.get("/api/ventas").json() == []


def test_sale_is_recorded_once_per_session(client, auto, usuario, monkeypatch):
    _serve_session(monkeypatch, _stripe_session(auto, usuario))
    first = client.post("/api/ventas", json={"sessionId": "cs_test_paid"})
    assert first.status_code == 201
    venta = first.json()
    assert venta["autoId"] == auto["id"]
    assert venta["usuarioId"] == usuario["id"]
    assert venta["monto"] == 9500000
    assert venta["estado"] == "pagado"

    again = client.post("/api/ventas", json={"sessionId": "cs_test_paid"})
    assert again.json()["id"] == venta["id"]
    assert len(client.get("/api/ventas").json()) == 1
    assert len(client.get("/api/ventas", params={"usuarioId": usuario["id"]}).json()) == 1


def test_concurrent_sale_returns_the_stored_row(client, db, auto, usuario, monkeypatch):
    _serve_session(monkeypatch, _stripe_session(auto, usuario, "cs_test_race"))

    # the other request commits between our lookup and our insert
    stored = Venta(monto=9500000, moneda="mxn", stripe_session_id="cs_test_race")
    db.add(stored)
    db.flush()
    stored_id = stored.id
    db.commit()

    original_find = pagos._find_sale
    lookups = []

    def find_after_race(session, session_id):
        lookups.append(session_id)
        if len(lookups) == 1:
            return None
        return original_find(session, session_id)

    monkeypatch.setattr(pagos, "_find_sale", find_after_race)

    resp = client.post("/api/ventas", json={"sessionId": "cs_test_race"})
    assert resp.status_code == 201
    assert resp.json()["id"] == stored_id
    assert lookups == ["cs_test_race", "cs_test_race"]
    assert len(client.get("/api/ventas").json()) == 1


def test_webhook_records_completed_checkout(client, auto, usuario, monkeypatch):
    event = stripe.Event.construct_from(
        {
            "id": "evt_test_1",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": _stripe_session(auto, usuario, "cs_test_hook").to_dict()},
        },
        STRIPE_KEY,
    )
    monkeypatch.setattr(stripe.Webhook, "construct_event", lambda payload, sig, secret: event)

    resp = client.post(
        "/api/stripe/webhook",
        content=b"{}",
        headers={"stripe-signature": "t=1,v1=abc"},
    )
    assert resp.status_code == 200
    ventas = client.get("/api/ventas").json()
    assert [v["stripeSessionId"] for v in ventas] == ["cs_test_hook"]


def test_webhook_rejects_bad_signature(client, monkeypatch):
    def bad_signature(payload, sig, secret):
        raise stripe.SignatureVerificationError("No signatures found", sig)

    monkeypatch.setattr(stripe.Webhook, "construct_event", bad_signature)

    resp = client.post(
        "/api/stripe/webhook",
        content=b"{}",
        headers={"stripe-signature": "t=1,v1=forged"},
    )
    assert resp.status_code == 400
    assert client.post("/api/stripe/webhook", content=b"{}").status_code == 400
