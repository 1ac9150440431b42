from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from autos_lujo.core.config import get_settings
from autos_lujo.core.database import Base

settings = get_settings()


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    nombre = Column(String(255), nullable=False)
    rol = Column(String(20), nullable=False, default="user")
    telefono = Column(String(50), nullable=True)

    # relative path inside MEDIA_ROOT, e.g. "usuarios/3/5f1c....jpg"
    imagen = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    comentarios = relationship("Comentario", back_populates="usuario")
    citas = relationship(
        "Cita",
        back_populates="usuario",
        cascade="all, delete",
    )

    @property
    def imagen_url(self):
        if not self.imagen:
            return None
        return f"{settings.media_url}/{self.imagen}"
