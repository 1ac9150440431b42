from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from autos_lujo.core.database import get_db
from autos_lujo.core.errors import AuthError, ConflictError
from autos_lujo.core.security import create_access_token, hash_password, verify_password
from autos_lujo.models.usuario import Usuario
from autos_lujo.schemas.usuario import LoginResponse, UsuarioCreate, UsuarioLogin, UsuarioRead

router = APIRouter(prefix="/api", tags=["auth"])


# ---------------------------
# Registro (POST)
# ---------------------------
@router.post("/register", response_model=UsuarioRead, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UsuarioCreate,
    db: Session = Depends(get_db),
):
    # un email, una cuenta
    existing = db.query(Usuario).filter(Usuario.email == user_in.email).first()
    if existing:
        raise ConflictError("El usuario ya existe")

    usuario = Usuario(
        email=user_in.email,
        hashed_password=hash_password(user_in.password),
        nombre=user_in.nombre,
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


# ---------------------------
# Login (POST)
#   → JWT para /api/users/me
# ---------------------------
@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UsuarioLogin,
    db: Session = Depends(get_db),
):
    usuario = db.query(Usuario).filter(Usuario.email == credentials.email).first()
    if not usuario:
        raise AuthError("Usuario no encontrado")

    if not verify_password(credentials.password, usuario.hashed_password):
        raise AuthError("Contraseña incorrecta")

    token = create_access_token({"sub": str(usuario.id), "rol": usuario.rol})
    return LoginResponse(
        id=usuario.id,
        email=usuario.email,
        nombre=usuario.nombre,
        rol=usuario.rol,
        telefono=usuario.telefono,
        imagen=usuario.imagen_url,
        access_token=token,
    )
