from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VentaConfirm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)


class VentaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    auto_id: Optional[int] = Field(default=None, alias="autoId")
    usuario_id: Optional[int] = Field(default=None, alias="usuarioId")
    monto: float
    moneda: str
    estado: str
    stripe_session_id: str = Field(alias="stripeSessionId")
    fecha: datetime
