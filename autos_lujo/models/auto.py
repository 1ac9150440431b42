from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    DateTime,
    JSON,
)
from sqlalchemy.orm import relationship, validates

from autos_lujo.core.database import Base
from autos_lujo.core.errors import ValidationError

# value, label, color
CATEGORIAS_DE_LUJO = [
    ("supercar", "Supercar", "red"),
    ("hypercar", "Hypercar", "purple"),
    ("luxury-sedan", "Sedán de Lujo", "blue"),
    ("luxury-suv", "SUV de Lujo", "green"),
    ("convertible", "Convertible", "yellow"),
    ("coupe-gran-turismo", "Coupé Gran Turismo", "orange"),
    ("deportivo-clasico", "Deportivo Clásico", "indigo"),
]

CATEGORIA_VALUES = frozenset(value for value, _, _ in CATEGORIAS_DE_LUJO)


class Auto(Base):
    __tablename__ = "autos"

    id = Column(Integer, primary_key=True, index=True)

    marca = Column(String(100), nullable=False)
    modelo = Column(String(100), nullable=False)
    anio = Column(Integer, nullable=True)
    precio = Column(Numeric(14, 2, asdecimal=False), nullable=True)
    descripcion = Column(Text, nullable=True)

    # ficha técnica
    potencia = Column(String(100), nullable=True)
    caballos_fuerza = Column(Integer, nullable=True)
    cilindrada = Column(String(50), nullable=True)
    tamano_motor = Column(String(50), nullable=True)
    tipo_combustible = Column(String(50), nullable=True)
    transmision = Column(String(50), nullable=True)
    traccion = Column(String(50), nullable=True)
    largo = Column(String(50), nullable=True)
    ancho = Column(String(50), nullable=True)
    alto = Column(String(50), nullable=True)
    peso = Column(String(50), nullable=True)

    # media URLs
    imagenes = Column(JSON, nullable=False, default=list)
    videos = Column(JSON, nullable=False, default=list)

    categoria = Column(String(50), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    citas = relationship(
        "Cita",
        back_populates="auto",
        cascade="all, delete",
    )

    @validates("categoria")
    def _validate_categoria(self, key, value):
        # accept the schema Enum as well as plain strings
        value = getattr(value, "value", value)
        if value not in CATEGORIA_VALUES:
            raise ValidationError(
                "Categoría inválida",
                {"categoria": value, "permitidas": sorted(CATEGORIA_VALUES)},
            )
        return value
