import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from autos_lujo.core.database import get_db
from autos_lujo.core.errors import InternalError, NotFoundError, ValidationError
from autos_lujo.models.auto import Auto
from autos_lujo.models.venta import ESTADO_PAGADO, Venta
from autos_lujo.schemas.pago import CheckoutRequest, CheckoutResponse, CheckoutSessionRead
from autos_lujo.schemas.venta import VentaConfirm, VentaRead
from autos_lujo.services import stripe_client
from autos_lujo.services.stripe_client import PaymentProviderError, WebhookSignatureError

router = APIRouter(prefix="/api", tags=["pagos"])

logger = logging.getLogger(__name__)


# ---------------------------
# Común: registro de ventas
# ---------------------------
def _metadata_id(metadata, key: str) -> Optional[int]:
    value = (metadata or {}).get(key)
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _find_sale(db: Session, session_id: str) -> Optional[Venta]:
    return db.query(Venta).filter(Venta.stripe_session_id == session_id).first()


def _record_sale(db: Session, session: dict) -> Venta:
    """
    Store the sale paid through ``session`` (a Stripe Checkout session).

    Only sessions Stripe reports as paid are recorded; recording the same
    session twice returns the existing row, also when two requests race.
    """
    if session.get("payment_status") != "paid":
        raise ValidationError(
            "El pago no está completado",
            {"payment_status": session.get("payment_status")},
        )

    existing = _find_sale(db, session["id"])
    if existing:
        return existing

    metadata = session.get("metadata") or {}
    venta = Venta(
        auto_id=_metadata_id(metadata, "auto_id"),
        usuario_id=_metadata_id(metadata, "usuario_id"),
        # Stripe amounts are in cents
        monto=(session.get("amount_total") or 0) / 100,
        moneda=session.get("currency") or "mxn",
        estado=ESTADO_PAGADO,
        stripe_session_id=session["id"],
    )
    db.add(venta)
    try:
        db.commit()
    except IntegrityError:
        # another request stored this session first
        db.rollback()
        existing = _find_sale(db, session["id"])
        if existing:
            logger.info("Sale for session %s already recorded", session["id"])
            return existing
        raise
    db.refresh(venta)
    logger.info("Recorded sale %s for session %s", venta.id, venta.stripe_session_id)
    return venta


# ---------------------------
# Sesión de pago (POST)
# ---------------------------
@router.post("/create-checkout-session", response_model=CheckoutResponse)
@router.post("/pago", response_model=CheckoutResponse)
def create_checkout_session(
    checkout_in: CheckoutRequest,
    db: Session = Depends(get_db),
):
    auto = db.get(Auto, checkout_in.auto_id)
    if not auto:
        raise NotFoundError("Auto no encontrado")

    precio = checkout_in.precio if checkout_in.precio is not None else auto.precio
    if not precio or precio <= 0:
        raise ValidationError("El auto no tiene un precio válido")

    try:
        session = stripe_client.create_checkout_session(auto, checkout_in.usuario_id, precio)
    except PaymentProviderError as e:
        raise InternalError("Error al crear la sesión de Stripe", str(e))

    return CheckoutResponse(id=session["id"], url=session.get("url"))


# ---------------------------
# Estado de la sesión (GET)
# ---------------------------
@router.get("/checkout-session", response_model=CheckoutSessionRead)
def get_checkout_session(session_id: Optional[str] = Query(default=None)):
    if not session_id:
        raise ValidationError("No session_id provided")

    try:
        session = stripe_client.retrieve_checkout_session(session_id)
    except PaymentProviderError as e:
        raise InternalError("Error al obtener sesión", str(e))

    customer = session.get("customer_details") or {}
    return CheckoutSessionRead(
        id=session["id"],
        status=session.get("status"),
        payment_status=session.get("payment_status"),
        amount_total=session.get("amount_total"),
        currency=session.get("currency"),
        customer_email=customer.get("email"),
        metadata=session.get("metadata") or {},
    )


# ---------------------------
# Ventas (GET / POST)
# ---------------------------
@router.get("/ventas", response_model=List[VentaRead])
def list_ventas(
    usuario_id: Optional[int] = Query(default=None, alias="usuarioId"),
    db: Session = Depends(get_db),
):
    query = db.query(Venta)
    if usuario_id is not None:
        query = query.filter(Venta.usuario_id == usuario_id)
    return query.order_by(Venta.fecha.desc()).all()


@router.post("/ventas", response_model=VentaRead, status_code=status.HTTP_201_CREATED)
def create_venta(
    venta_in: VentaConfirm,
    db: Session = Depends(get_db),
):
    # the client only names the session; Stripe says whether it was paid
    try:
        session = stripe_client.retrieve_checkout_session(venta_in.session_id)
    except PaymentProviderError as e:
        raise InternalError("Error al verificar el pago", str(e))

    return _record_sale(db, session)


# ---------------------------
# Webhook de Stripe (POST)
#   firma verificada con STRIPE_WEBHOOK_SECRET
# ---------------------------
@router.post("/stripe/webhook")
async def stripe_webhook(request: Request, db: Session = Depends(get_db)):
    # raw body; the signature covers the exact bytes
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        event = stripe_client.construct_webhook_event(payload, signature)
    except WebhookSignatureError as e:
        raise ValidationError("Firma de webhook inválida", str(e))
    except PaymentProviderError as e:
        raise InternalError("Webhook de Stripe no configurado", str(e))

    if event["type"] == "checkout.session.completed":
        session = event["data"]["object"]
        if session.get("payment_status") == "paid":
            _record_sale(db, session)
        else:
            logger.info("Checkout session %s completed without payment yet", session.get("id"))

    return {"received": True}
