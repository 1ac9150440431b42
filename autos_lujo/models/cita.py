from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from autos_lujo.core.database import Base


class Cita(Base):
    __tablename__ = "citas"

    id = Column(Integer, primary_key=True, index=True)

    auto_id = Column(Integer, ForeignKey("autos.id", ondelete="CASCADE"), nullable=False, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)

    fecha = Column(Date, nullable=False)
    hora = Column(String(10), nullable=False)
    servicio = Column(String(100), nullable=False)

    # contacto
    nombre = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    telefono = Column(String(50), nullable=False)
    direccion = Column(String(500), nullable=True)
    notas = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    auto = relationship("Auto", back_populates="citas")
    usuario = relationship("Usuario", back_populates="citas")
