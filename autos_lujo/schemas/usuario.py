from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UsuarioBase(BaseModel):
    email: EmailStr


class UsuarioCreate(UsuarioBase):
    password: str = Field(min_length=1)
    nombre: str = Field(min_length=1, max_length=255)


class UsuarioLogin(UsuarioBase):
    password: str


class UsuarioUpdate(BaseModel):
    email: Optional[EmailStr] = None
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=255)
    telefono: Optional[str] = Field(default=None, max_length=50)


class UsuarioRead(UsuarioBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    nombre: str
    rol: str
    telefono: Optional[str] = None
    # public URL of the stored profile image
    imagen: Optional[str] = Field(default=None, validation_alias="imagen_url")
    created_at: datetime = Field(serialization_alias="createdAt")


class LoginResponse(BaseModel):
    id: int
    email: EmailStr
    nombre: str
    rol: str
    telefono: Optional[str] = None
    imagen: Optional[str] = None
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
