from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from autos_lujo.core.database import get_db
from autos_lujo.models.cita import Cita
from autos_lujo.schemas.cita import CitaCreate, CitaRead

router = APIRouter(prefix="/api/citas", tags=["citas"])


# ---------------------------
# Citas (POST / GET)
#   filtros: ?usuarioId= y ?autoId=
# ---------------------------
@router.post("", response_model=CitaRead, status_code=status.HTTP_201_CREATED)
def create_cita(
    cita_in: CitaCreate,
    db: Session = Depends(get_db),
):
    # el cuerpo ya viene validado por CitaCreate
    cita = Cita(**cita_in.model_dump())
    db.add(cita)
    db.commit()
    db.refresh(cita)
    return cita


@router.get("", response_model=List[CitaRead])
def list_citas(
    usuario_id: Optional[int] = Query(default=None, alias="usuarioId"),
    auto_id: Optional[int] = Query(default=None, alias="autoId"),
    db: Session = Depends(get_db),
):
    query = db.query(Cita)
    if usuario_id is not None:
        query = query.filter(Cita.usuario_id == usuario_id)
    if auto_id is not None:
        query = query.filter(Cita.auto_id == auto_id)
    return query.order_by(Cita.fecha.asc(), Cita.hora.asc()).all()
