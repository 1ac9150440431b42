from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from autos_lujo.core.database import get_db
from autos_lujo.core.errors import NotFoundError
from autos_lujo.models.auto import Auto, CATEGORIAS_DE_LUJO
from autos_lujo.models.comentario import Comentario
from autos_lujo.models.venta import Venta
from autos_lujo.schemas.auto import AutoCreate, AutoRead, AutoUpdate, Categoria, CategoriaRead
from autos_lujo.schemas.usuario import MessageResponse

router = APIRouter(prefix="/api", tags=["autos"])


# ---------------------------
# Común: auto o 404
# ---------------------------
def _get_auto_or_404(auto_id: int, db: Session) -> Auto:
    auto = db.get(Auto, auto_id)
    if not auto:
        raise NotFoundError("Auto no encontrado")
    return auto


# ---------------------------
# Categorías de lujo (GET)
# ---------------------------
@router.get("/categorias", response_model=List[CategoriaRead])
def list_categorias():
    return [
        {"value": value, "label": label, "color": color}
        for value, label, color in CATEGORIAS_DE_LUJO
    ]


# ---------------------------
# Catálogo (GET / POST)
#   ?categoria=supercar filtra por categoría
# ---------------------------
@router.get("/autos", response_model=List[AutoRead])
def list_autos(
    categoria: Optional[Categoria] = None,
    db: Session = Depends(get_db),
):
    query = db.query(Auto)
    if categoria is not None:
        query = query.filter(Auto.categoria == categoria.value)
    return query.order_by(Auto.id.asc()).all()


@router.post("/autos", response_model=AutoRead, status_code=status.HTTP_201_CREATED)
def create_auto(
    auto_in: AutoCreate,
    db: Session = Depends(get_db),
):
    auto = Auto(**auto_in.model_dump())
    db.add(auto)
    db.commit()
    db.refresh(auto)
    return auto


# ---------------------------
# Detalle, edición y borrado
# ---------------------------
@router.get("/autos/{auto_id}", response_model=AutoRead)
def get_auto(
    auto_id: int,
    db: Session = Depends(get_db),
):
    return _get_auto_or_404(auto_id, db)


@router.put("/autos/{auto_id}", response_model=AutoRead)
def update_auto(
    auto_id: int,
    auto_in: AutoUpdate,
    db: Session = Depends(get_db),
):
    auto = _get_auto_or_404(auto_id, db)

    # only the fields present in the body are overwritten
    data = auto_in.model_dump(exclude_unset=True)
    for field, value in data.items():
        setattr(auto, field, value)

    db.add(auto)
    db.commit()
    db.refresh(auto)
    return auto


@router.delete("/autos/{auto_id}", response_model=MessageResponse)
def delete_auto(
    auto_id: int,
    db: Session = Depends(get_db),
):
    auto = _get_auto_or_404(auto_id, db)

    # comments reference the listing by plain id, drop them with it
    db.query(Comentario).filter(Comentario.auto_id == auto_id).update(
        {Comentario.parent_id: None}, synchronize_session=False
    )
    db.query(Comentario).filter(Comentario.auto_id == auto_id).delete(synchronize_session=False)
    # sales stay in the ledger, detached from the listing
    db.query(Venta).filter(Venta.auto_id == auto_id).update(
        {Venta.auto_id: None}, synchronize_session=False
    )

    db.delete(auto)
    db.commit()
    return {"message": "Auto eliminado correctamente"}
