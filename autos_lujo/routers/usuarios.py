import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from autos_lujo.core.database import get_db
from autos_lujo.core.errors import ConflictError, NotFoundError, ValidationError
from autos_lujo.core.security import get_current_user
from autos_lujo.models.usuario import Usuario
from autos_lujo.models.venta import Venta
from autos_lujo.schemas.usuario import MessageResponse, UsuarioRead, UsuarioUpdate
from autos_lujo.services import image_storage

router = APIRouter(prefix="/api/users", tags=["usuarios"])

logger = logging.getLogger(__name__)


# ---------------------------
# Común: usuario o 404
# ---------------------------
def _get_usuario_or_404(usuario_id: int, db: Session) -> Usuario:
    usuario = db.get(Usuario, usuario_id)
    if not usuario:
        raise NotFoundError("Usuario no encontrado")
    return usuario


# ---------------------------
# Cuentas (GET)
# ---------------------------
@router.get("", response_model=List[UsuarioRead])
def list_usuarios(db: Session = Depends(get_db)):
    return db.query(Usuario).order_by(Usuario.id.asc()).all()


@router.get("/me", response_model=UsuarioRead)
def read_me(current_user: Usuario = Depends(get_current_user)):
    return current_user


@router.get("/{usuario_id}", response_model=UsuarioRead)
def get_usuario(usuario_id: int, db: Session = Depends(get_db)):
    return _get_usuario_or_404(usuario_id, db)


# ---------------------------
# Perfil (PUT, multipart)
#   imagen opcional → media/usuarios/<id>/
# ---------------------------
@router.put("/{usuario_id}", response_model=UsuarioRead)
async def update_usuario(
    usuario_id: int,
    nombre: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    telefono: Optional[str] = Form(None),
    imagen: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
):
    usuario = _get_usuario_or_404(usuario_id, db)

    try:
        fields = UsuarioUpdate(nombre=nombre, email=email, telefono=telefono)
    except PydanticValidationError as e:
        raise ValidationError("Datos inválidos", e.errors(include_context=False))

    data = fields.model_dump(exclude_none=True)

    if "email" in data and data["email"] != usuario.email:
        taken = (
            db.query(Usuario)
            .filter(Usuario.email == data["email"], Usuario.id != usuario.id)
            .first()
        )
        if taken:
            raise ConflictError("El email ya está registrado")

    new_image: Optional[str] = None
    try:
        if imagen is not None and imagen.filename:
            new_image = await image_storage.save_upload(imagen, f"usuarios/{usuario.id}")

            # the old image goes first; losing it must not block the update
            if usuario.imagen:
                try:
                    image_storage.delete_image(usuario.imagen)
                except OSError:
                    logger.warning(
                        "Could not delete previous image %s of user %s",
                        usuario.imagen,
                        usuario.id,
                        exc_info=True,
                    )
            data["imagen"] = new_image

        for field, value in data.items():
            setattr(usuario, field, value)

        db.add(usuario)
        db.commit()
    except Exception:
        db.rollback()
        if new_image:
            image_storage.discard_image(new_image)
        raise

    db.refresh(usuario)
    return usuario


# ---------------------------
# Imagen de perfil (DELETE)
# ---------------------------
@router.delete("/{usuario_id}/imagen", response_model=UsuarioRead)
def delete_usuario_imagen(usuario_id: int, db: Session = Depends(get_db)):
    usuario = _get_usuario_or_404(usuario_id, db)
    if not usuario.imagen:
        raise ValidationError("El usuario no tiene imagen")

    image_storage.discard_image(usuario.imagen)
    usuario.imagen = None
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


# ---------------------------
# Borrado de cuenta (DELETE)
# ---------------------------
@router.delete("/{usuario_id}", response_model=MessageResponse)
def delete_usuario(usuario_id: int, db: Session = Depends(get_db)):
    usuario = _get_usuario_or_404(usuario_id, db)
    imagen = usuario.imagen

    db.query(Venta).filter(Venta.usuario_id == usuario_id).update(
        {Venta.usuario_id: None}, synchronize_session=False
    )
    db.delete(usuario)
    db.commit()

    if imagen:
        image_storage.discard_image(imagen)
    return {"message": "Usuario eliminado correctamente"}
