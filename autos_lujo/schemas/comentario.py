from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ComentarioCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    auto_id: int = Field(alias="autoId")
    usuario_id: Optional[int] = Field(default=None, alias="usuarioId")
    nombre_anonimo: Optional[str] = Field(default=None, alias="nombreAnonimo", max_length=100)
    contenido: str = ""
    calificacion: Optional[int] = Field(default=None, ge=1, le=5)
    parent_id: Optional[int] = Field(default=None, alias="parentId")


class ComentarioUpdate(BaseModel):
    contenido: str = ""
    calificacion: Optional[int] = Field(default=None, ge=1, le=5)


class RespuestaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    auto_id: int = Field(alias="autoId")
    usuario_id: Optional[int] = Field(default=None, alias="usuarioId")
    nombre_anonimo: Optional[str] = Field(default=None, alias="nombreAnonimo")
    autor: str
    contenido: str
    calificacion: Optional[int] = None
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    fecha: datetime


class ComentarioRead(RespuestaRead):
    respuestas: List[RespuestaRead] = []
