from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Categoria(str, Enum):
    supercar = "supercar"
    hypercar = "hypercar"
    luxury_sedan = "luxury-sedan"
    luxury_suv = "luxury-suv"
    convertible = "convertible"
    coupe_gran_turismo = "coupe-gran-turismo"
    deportivo_clasico = "deportivo-clasico"


class CategoriaRead(BaseModel):
    value: Categoria
    label: str
    color: str


class AutoBase(BaseModel):
    # JSON keys keep the names the frontend already sends ("año", "caballosFuerza", ...)
    model_config = ConfigDict(populate_by_name=True)

    marca: str = Field(min_length=1, max_length=100)
    modelo: str = Field(min_length=1, max_length=100)
    anio: Optional[int] = Field(default=None, alias="año")
    precio: Optional[float] = Field(default=None, ge=0)
    descripcion: Optional[str] = None

    potencia: Optional[str] = None
    caballos_fuerza: Optional[int] = Field(default=None, alias="caballosFuerza")
    cilindrada: Optional[str] = None
    tamano_motor: Optional[str] = Field(default=None, alias="tamanoMotor")
    tipo_combustible: Optional[str] = Field(default=None, alias="tipoCombustible")
    transmision: Optional[str] = None
    traccion: Optional[str] = None
    largo: Optional[str] = None
    ancho: Optional[str] = None
    alto: Optional[str] = None
    peso: Optional[str] = None

    imagenes: List[str] = []
    videos: List[str] = []

    categoria: Categoria


class AutoCreate(AutoBase):
    pass


class AutoUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    marca: Optional[str] = Field(default=None, min_length=1, max_length=100)
    modelo: Optional[str] = Field(default=None, min_length=1, max_length=100)
    anio: Optional[int] = Field(default=None, alias="año")
    precio: Optional[float] = Field(default=None, ge=0)
    descripcion: Optional[str] = None

    potencia: Optional[str] = None
    caballos_fuerza: Optional[int] = Field(default=None, alias="caballosFuerza")
    cilindrada: Optional[str] = None
    tamano_motor: Optional[str] = Field(default=None, alias="tamanoMotor")
    tipo_combustible: Optional[str] = Field(default=None, alias="tipoCombustible")
    transmision: Optional[str] = None
    traccion: Optional[str] = None
    largo: Optional[str] = None
    ancho: Optional[str] = None
    alto: Optional[str] = None
    peso: Optional[str] = None

    imagenes: Optional[List[str]] = None
    videos: Optional[List[str]] = None

    categoria: Optional[Categoria] = None


class AutoRead(AutoBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
