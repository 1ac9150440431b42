from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CitaBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    auto_id: int = Field(alias="autoId")
    usuario_id: int = Field(alias="usuarioId")

    fecha: date
    hora: str = Field(min_length=1, max_length=10)
    servicio: str = Field(min_length=1, max_length=100)

    nombre: str = Field(min_length=1, max_length=255)
    email: EmailStr
    telefono: str = Field(min_length=1, max_length=50)
    direccion: Optional[str] = Field(default=None, max_length=500)
    notas: Optional[str] = None


class CitaCreate(CitaBase):
    pass


class CitaRead(CitaBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    created_at: datetime = Field(alias="createdAt")
