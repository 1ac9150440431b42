from datetime import datetime

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey

from autos_lujo.core.database import Base

ESTADO_PAGADO = "pagado"


class Venta(Base):
    __tablename__ = "ventas"

    id = Column(Integer, primary_key=True, index=True)

    # the ledger outlives the listing and the buyer account
    auto_id = Column(Integer, ForeignKey("autos.id", ondelete="SET NULL"), nullable=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True, index=True)

    monto = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    moneda = Column(String(3), nullable=False, default="mxn")
    estado = Column(String(20), nullable=False, default=ESTADO_PAGADO)

    # Stripe Checkout session that paid for this sale
    stripe_session_id = Column(String(255), unique=True, nullable=False, index=True)

    fecha = Column(DateTime, default=datetime.utcnow, nullable=False)
