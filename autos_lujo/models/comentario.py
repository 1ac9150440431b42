from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from autos_lujo.core.database import Base


class Comentario(Base):
    __tablename__ = "comentarios"

    id = Column(Integer, primary_key=True, index=True)

    # not a foreign key: comments may point at a listing id the catalog doesn't know
    auto_id = Column(Integer, nullable=False, index=True)

    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    nombre_anonimo = Column(String(100), nullable=True)

    contenido = Column(Text, nullable=False)
    calificacion = Column(Integer, nullable=True)

    parent_id = Column(Integer, ForeignKey("comentarios.id"), nullable=True, index=True)

    fecha = Column(DateTime, default=datetime.utcnow, nullable=False)

    usuario = relationship("Usuario", back_populates="comentarios")

    parent = relationship("Comentario", remote_side=[id], back_populates="respuestas")
    respuestas = relationship(
        "Comentario",
        back_populates="parent",
        order_by="Comentario.id",
    )

    @property
    def autor(self):
        if self.usuario is not None:
            return self.usuario.nombre
        return self.nombre_anonimo or "Anónimo"
