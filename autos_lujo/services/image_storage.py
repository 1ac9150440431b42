# autos_lujo/services/image_storage.py
"""
Profile image storage on the local media directory.

Files live under ``MEDIA_ROOT`` and are served by the static mount at
``MEDIA_URL``.  The database only keeps the path relative to
``MEDIA_ROOT`` (e.g. ``usuarios/3/1f0c...e2.jpg``).
"""
import logging
import os
import uuid
from pathlib import Path

from fastapi import UploadFile

from autos_lujo.core.config import get_settings
from autos_lujo.core.errors import ValidationError

settings = get_settings()
logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = [".jpg", ".jpeg", ".png", ".webp"]


async def save_upload(upload: UploadFile, folder: str) -> str:
    """Store ``upload`` under ``MEDIA_ROOT/folder`` and return its relative path."""
    filename = upload.filename or "image"
    ext = os.path.splitext(filename)[1].lower()

    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(f"Tipo de archivo no soportado: {ext or filename}")

    contents = await upload.read()
    if not contents:
        raise ValidationError("La imagen está vacía")

    target_dir: Path = settings.media_root / folder
    target_dir.mkdir(parents=True, exist_ok=True)

    relative_path = Path(folder) / f"{uuid.uuid4().hex}{ext}"
    (settings.media_root / relative_path).write_bytes(contents)

    return relative_path.as_posix()


def delete_image(relative_path: str) -> None:
    """Remove a stored image. Raises ``OSError`` if the file can't be removed."""
    file_path = settings.media_root / relative_path
    if file_path.exists():
        file_path.unlink()


def discard_image(relative_path: str) -> None:
    """Best-effort removal: failures are logged, never raised."""
    try:
        delete_image(relative_path)
    except OSError:
        logger.warning("Could not remove image %s", relative_path, exc_info=True)
