from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    auto_id: int = Field(alias="autoId")
    usuario_id: int = Field(alias="usuarioId")
    # falls back to the listing price when omitted
    precio: Optional[float] = Field(default=None, gt=0)


class CheckoutResponse(BaseModel):
    id: str
    url: Optional[str] = None


class CheckoutSessionRead(BaseModel):
    id: str
    status: Optional[str] = None
    payment_status: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    customer_email: Optional[str] = None
    metadata: Dict[str, Any] = {}
