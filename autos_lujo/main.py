import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from autos_lujo.core.config import get_settings
from autos_lujo.core.database import Base, engine
from autos_lujo.core.errors import register_exception_handlers
from autos_lujo.core.logging_config import setup_logging
from autos_lujo.routers import health, auth, autos, usuarios, comentarios, citas, pagos

# --- Load settings ---
settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

# --- Create DB tables (routers above import every model) ---
Base.metadata.create_all(bind=engine)

# --- Create FastAPI app ---
app = FastAPI(title=settings.app_name)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Routers ---
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(autos.router)
app.include_router(usuarios.router)
app.include_router(comentarios.router)
app.include_router(citas.router)
app.include_router(pagos.router)

# --- Static media files (profile images) ---
settings.media_root.mkdir(parents=True, exist_ok=True)
app.mount(
    settings.media_url,
    StaticFiles(directory=settings.media_root),
    name="media",
)


@app.on_event("startup")
def log_startup():
    logger.info("%s started (env=%s)", settings.app_name, settings.app_env)


# --- Root endpoint ---
@app.get("/")
def root():
    return {"message": "Autos de Lujo backend is running"}


def run():
    uvicorn.run(app, host=settings.host, port=settings.port)
