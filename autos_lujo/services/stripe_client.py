# autos_lujo/services/stripe_client.py
import logging
from typing import Optional

import stripe


from autos_lujo.core.config import get_settings
from autos_lujo.models.auto import Auto

settings = get_settings()
logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    pass


class WebhookSignatureError(Exception):
    pass


def _api_key() -> str:
    if not settings.stripe_secret_key:
        raise PaymentProviderError("Stripe no está configurado")
    return settings.stripe_secret_key


def _to_plain(obj):
    """Turn a Stripe object (and anything nested in it) into plain dicts and lists."""
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    if isinstance(obj, dict):
        return {key: _to_plain(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_to_plain(value) for value in obj]
    return obj


def _unit_amount(precio: float) -> int:
    # Stripe wants the smallest currency unit
    return int(round(precio * 100))


def create_checkout_session(auto: Auto, usuario_id: int, precio: float) -> dict:
    """
    Create a hosted Checkout session for buying ``auto``.

    The listing and buyer ids travel in the session metadata so the sale can
    be recorded from the verified session later on.
    """
    api_key = _api_key()
    try:
        session = stripe.checkout.Session.create(
            api_key=api_key,
            payment_method_types=["card"],
            mode="payment",
            line_items=[
                {
                    "price_data": {
                        "currency": settings.stripe_currency,
                        "product_data": {
                            "name": f"{auto.marca} {auto.modelo}",
                            "description": auto.descripcion or "Auto en venta",
                        },
                        "unit_amount": _unit_amount(precio),
                    },
                    "quantity": 1,
                }
            ],
            client_reference_id=str(usuario_id),
            metadata={"auto_id": str(auto.id), "usuario_id": str(usuario_id)},
            success_url=f"{settings.frontend_url}/autos/exito?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.frontend_url}/autos/{auto.id}",
        )
    except stripe.StripeError as e:
        logger.error("Stripe checkout session creation failed: %s", e)
        raise PaymentProviderError(str(e)) from e
    return _to_plain(session)


def retrieve_checkout_session(session_id: str) -> dict:
    api_key = _api_key()
    try:
        session = stripe.checkout.Session.retrieve(session_id, api_key=api_key)
    except stripe.StripeError as e:
        logger.error("Stripe checkout session %s lookup failed: %s", session_id, e)
        raise PaymentProviderError(str(e)) from e
    return _to_plain(session)


def construct_webhook_event(payload: bytes, signature: Optional[str]) -> dict:
    """Verify a webhook delivery and return the parsed event."""
    if not settings.stripe_webhook_secret:
        raise PaymentProviderError("Webhook de Stripe no configurado")
    if not signature:
        raise WebhookSignatureError("Falta la firma de Stripe")
    try:
        event = stripe.Webhook.construct_event(payload, signature, settings.stripe_webhook_secret)
    except (ValueError, stripe.SignatureVerificationError) as e:
        raise WebhookSignatureError(str(e)) from e
    return _to_plain(event)
