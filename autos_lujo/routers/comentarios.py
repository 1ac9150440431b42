from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload

from autos_lujo.core.database import get_db
from autos_lujo.core.errors import NotFoundError, ValidationError
from autos_lujo.models.comentario import Comentario
from autos_lujo.models.usuario import Usuario
from autos_lujo.schemas.comentario import ComentarioCreate, ComentarioRead, ComentarioUpdate

router = APIRouter(prefix="/api/comentarios", tags=["comentarios"])


# ---------------------------
# Común: carga de autores y validación
# ---------------------------
def _with_authors(query):
    # authors of the comment and of its direct replies, loaded up front
    return query.options(
        selectinload(Comentario.usuario),
        selectinload(Comentario.respuestas).selectinload(Comentario.usuario),
    )


def _get_comentario_or_404(comentario_id: int, db: Session) -> Comentario:
    comentario = (
        _with_authors(db.query(Comentario))
        .filter(Comentario.id == comentario_id)
        .first()
    )
    if not comentario:
        raise NotFoundError("Comentario no encontrado")
    return comentario


def _require_contenido(contenido: str) -> str:
    contenido = (contenido or "").strip()
    if not contenido:
        raise ValidationError("El comentario no puede estar vacío")
    return contenido


# ---------------------------
# Consulta (GET)
#   /{auto_id} → raíces con sus respuestas directas
# ---------------------------
@router.get("/detalle/{comentario_id}", response_model=ComentarioRead)
def get_comentario(comentario_id: int, db: Session = Depends(get_db)):
    return _get_comentario_or_404(comentario_id, db)


@router.get("/{auto_id}", response_model=List[ComentarioRead])
def list_comentarios(auto_id: int, db: Session = Depends(get_db)):
    """Root comments of a listing, each with its direct replies."""
    return (
        _with_authors(db.query(Comentario))
        .filter(Comentario.auto_id == auto_id, Comentario.parent_id.is_(None))
        .order_by(Comentario.id.asc())
        .all()
    )


# ---------------------------
# Alta y edición (POST / PUT)
# ---------------------------
@router.post("", response_model=ComentarioRead, status_code=status.HTTP_201_CREATED)
def create_comentario(
    comentario_in: ComentarioCreate,
    db: Session = Depends(get_db),
):
    contenido = _require_contenido(comentario_in.contenido)

    nombre_anonimo = (comentario_in.nombre_anonimo or "").strip() or None
    if comentario_in.usuario_id is None and nombre_anonimo is None:
        raise ValidationError("Se requiere un usuario o un nombre anónimo")

    if comentario_in.usuario_id is not None and not db.get(Usuario, comentario_in.usuario_id):
        raise NotFoundError("Usuario no encontrado")

    if comentario_in.parent_id is not None:
        parent = db.get(Comentario, comentario_in.parent_id)
        if not parent:
            raise NotFoundError("Comentario padre no encontrado")
        if parent.auto_id != comentario_in.auto_id:
            raise ValidationError("El comentario padre pertenece a otro auto")

    # replies are found through parent_id, so a single insert links them
    comentario = Comentario(
        auto_id=comentario_in.auto_id,
        usuario_id=comentario_in.usuario_id,
        nombre_anonimo=nombre_anonimo,
        contenido=contenido,
        calificacion=comentario_in.calificacion,
        parent_id=comentario_in.parent_id,
    )
    db.add(comentario)
    db.commit()

    return _get_comentario_or_404(comentario.id, db)


@router.put("/{comentario_id}", response_model=ComentarioRead)
def update_comentario(
    comentario_id: int,
    comentario_in: ComentarioUpdate,
    db: Session = Depends(get_db),
):
    comentario = _get_comentario_or_404(comentario_id, db)

    comentario.contenido = _require_contenido(comentario_in.contenido)
    comentario.calificacion = comentario_in.calificacion

    db.add(comentario)
    db.commit()

    return _get_comentario_or_404(comentario_id, db)
